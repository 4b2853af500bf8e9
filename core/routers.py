from __future__ import annotations

"""
Router for server-rendered resources.

`ResourceRouter` maps a resource handler onto the conventional seven routes of
an HTML resource (list, new, create, show, edit, update, destroy). HTML forms
can only GET or POST, so updates also accept POST on the detail URL and
destroy has a POST-able `/destroy/` companion next to `DELETE` on the detail URL.

| URL                         | Method(s)            | Action  | Name               |
|-----------------------------|----------------------|---------|--------------------|
| `{prefix}/`                 | GET / POST           | list / create | `{basename}-list`    |
| `{prefix}/new/`             | GET                  | new     | `{basename}-new`     |
| `{prefix}/{pk}/`            | GET / POST PUT PATCH / DELETE | show / update / destroy | `{basename}-detail` |
| `{prefix}/{pk}/edit/`       | GET                  | edit    | `{basename}-edit`    |
| `{prefix}/{pk}/destroy/`    | POST                 | destroy | `{basename}-destroy` |
"""

from rest_framework.routers import Route, SimpleRouter


class ResourceRouter(SimpleRouter):
    """SimpleRouter with resource-style routes; `new` is declared before the detail route."""

    routes = [
        Route(
            url=r"^{prefix}{trailing_slash}$",
            mapping={"get": "list", "post": "create"},
            name="{basename}-list",
            detail=False,
            initkwargs={"suffix": "List"},
        ),
        Route(
            url=r"^{prefix}/new{trailing_slash}$",
            mapping={"get": "new"},
            name="{basename}-new",
            detail=False,
            initkwargs={"suffix": "New"},
        ),
        Route(
            url=r"^{prefix}/{lookup}{trailing_slash}$",
            mapping={
                "get": "show",
                "post": "update",
                "put": "update",
                "patch": "update",
                "delete": "destroy",
            },
            name="{basename}-detail",
            detail=True,
            initkwargs={"suffix": "Instance"},
        ),
        Route(
            url=r"^{prefix}/{lookup}/edit{trailing_slash}$",
            mapping={"get": "edit"},
            name="{basename}-edit",
            detail=True,
            initkwargs={"suffix": "Edit"},
        ),
        Route(
            url=r"^{prefix}/{lookup}/destroy{trailing_slash}$",
            mapping={"post": "destroy"},
            name="{basename}-destroy",
            detail=True,
            initkwargs={"suffix": "Destroy"},
        ),
    ]
