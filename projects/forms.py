from __future__ import annotations

from django import forms

from .models import Project


class ProjectForm(forms.ModelForm):
    """
    Attribute set accepted by create and update.

    The owner is never a form field: the handler builds or loads the instance
    inside the current user's scope before binding submitted data to it.
    """

    class Meta:
        model = Project
        fields = ["name", "description"]
        widgets = {
            "description": forms.Textarea(attrs={"rows": 4}),
        }

    def clean_name(self) -> str:
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise forms.ValidationError("Name can't be blank.")
        # The (user, name) constraint spans a field the form does not expose,
        # so Django skips it during model validation; check it here instead.
        owner_id = self.instance.user_id
        if owner_id is not None:
            clash = Project.objects.filter(user_id=owner_id, name=name).exclude(pk=self.instance.pk)
            if clash.exists():
                raise forms.ValidationError("You already have a project with this name.")
        return name
