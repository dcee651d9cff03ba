"""Code templates used to scaffold a new entity domain."""

from __future__ import annotations

import re

PLACEHOLDER = "newEntity"
TITLE_PLACEHOLDER = "NewEntity"

_ENTITY = '''from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class NewEntity:
    id: str
    name: str


@dataclass
class NewEntityCreate:
    name: str = ""


@dataclass
class NewEntityUpdate:
    name: str = ""


class NewEntityService(Protocol):
    def get_newEntity(self, id: str) -> NewEntity: ...

    def create_newEntity(self, input: NewEntityCreate) -> NewEntity: ...

    def get_all_newEntity(self) -> list[NewEntity]: ...

    def update_newEntity(self, id: str, input: NewEntityUpdate) -> NewEntity: ...

    def delete_newEntity(self, id: str) -> Any: ...
'''

_CONTROLLER = '''from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from fuego.context import Context

from .newEntity import NewEntity, NewEntityCreate, NewEntityService, NewEntityUpdate


@dataclass
class NewEntityResources:
    newEntity_service: NewEntityService

    def routes(self) -> list[tuple[str, str, Callable[[Context], Any]]]:
        return [
            ("GET", "/newEntity/", self.get_all_newEntity),
            ("POST", "/newEntity/", self.post_newEntity),
            ("GET", "/newEntity/{id}", self.get_newEntity),
            ("PUT", "/newEntity/{id}", self.put_newEntity),
            ("DELETE", "/newEntity/{id}", self.delete_newEntity),
        ]

    def get_all_newEntity(self, c: Context) -> list[NewEntity]:
        return self.newEntity_service.get_all_newEntity()

    def post_newEntity(self, c: Context) -> NewEntity:
        body: NewEntityCreate = c.body()
        return self.newEntity_service.create_newEntity(body)

    def get_newEntity(self, c: Context) -> NewEntity:
        return self.newEntity_service.get_newEntity(c.path_param("id"))

    def put_newEntity(self, c: Context) -> NewEntity:
        entity_id = c.path_param("id")
        body: NewEntityUpdate = c.body()
        return self.newEntity_service.update_newEntity(entity_id, body)

    def delete_newEntity(self, c: Context) -> Any:
        return self.newEntity_service.delete_newEntity(c.path_param("id"))
'''

_SERVICE = '''from __future__ import annotations

import threading
import time
from typing import Any

from fuego.errors import NotFoundError

from .newEntity import NewEntity, NewEntityCreate, NewEntityUpdate


class NewEntityServiceImpl:
    def __init__(self) -> None:
        self._repository: dict[str, NewEntity] = {}
        self._lock = threading.Lock()

    def _missing(self, id: str) -> NotFoundError:
        return NotFoundError(title="NewEntity not found with id " + id)

    def get_newEntity(self, id: str) -> NewEntity:
        with self._lock:
            if id not in self._repository:
                raise self._missing(id)
            return self._repository[id]

    def create_newEntity(self, input: NewEntityCreate) -> NewEntity:
        with self._lock:
            entity_id = str(time.time_ns())
            entity = NewEntity(id=entity_id, name=input.name)
            self._repository[entity_id] = entity
            return entity

    def get_all_newEntity(self) -> list[NewEntity]:
        with self._lock:
            return list(self._repository.values())

    def update_newEntity(self, id: str, input: NewEntityUpdate) -> NewEntity:
        with self._lock:
            if id not in self._repository:
                raise self._missing(id)
            entity = self._repository[id]
            if input.name:
                entity.name = input.name
            return entity

    def delete_newEntity(self, id: str) -> Any:
        with self._lock:
            if id not in self._repository:
                raise self._missing(id)
            del self._repository[id]
            return "deleted"


def new_newEntity_service() -> NewEntityServiceImpl:
    return NewEntityServiceImpl()
'''

_TEMPLATES: dict[str, str] = {
    "controller.py": _CONTROLLER,
    "entity.py": _ENTITY,
    "service.py": _SERVICE,
}


def template_names() -> list[str]:
    """Names of the available templates, sorted."""
    return sorted(_TEMPLATES)


def get_template(name: str) -> str:
    """Raw text of a template; FileNotFoundError when there is none by that name."""
    try:
        return _TEMPLATES[name]
    except KeyError:
        raise FileNotFoundError(f"no template named {name!r}") from None


def _title(text: str) -> str:
    return re.sub(r"\S+", lambda m: m[0][:1].upper() + m[0][1:].lower(), text)


def render_template(name: str, entity_name: str) -> str:
    """Template text with the placeholders replaced by the entity name."""
    content = get_template(name).replace(PLACEHOLDER, entity_name)
    return content.replace(TITLE_PLACEHOLDER, _title(entity_name))