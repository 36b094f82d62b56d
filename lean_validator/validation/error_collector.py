"""
ErrorCollector — error messages keyed by dotted path.

Paths are built from segments, skipping empty ones, so ``add(msg, "", "")``
stores under the unkeyed path ``""``. Nested validations hand their
collector to the parent, which merges it under its own path:

    child.add("bad zip", "post_code")
    parent.merge(child, "address")
    parent.get("address.post_code")  # ["bad zip"]
"""
from typing import Dict, Iterable, List, Mapping, Optional, Union

from lean_validator.config.constants import PATH_SEPARATOR


def build_path(segments: Iterable[object]) -> str:
    """Join non-empty segments with the path separator."""
    return PATH_SEPARATOR.join(str(s) for s in segments if str(s) != "")


def form_name_to_path(name: str) -> str:
    """Convert a form field name such as ``a[b][c]`` to ``a.b.c``."""
    if name == "":
        return ""
    normalized = name.replace("[", PATH_SEPARATOR).replace("]", "")
    return build_path(normalized.split(PATH_SEPARATOR))


class ErrorCollector:
    """Ordered message lists per path; insertion order is preserved."""

    def __init__(self, messages: Optional[Mapping[str, Union[str, List[str]]]] = None):
        self._messages: Dict[str, List[str]] = {}
        for path, value in (messages or {}).items():
            if isinstance(value, (list, tuple)):
                for message in value:
                    self.add(str(message), path)
            else:
                self.add(str(value), path)

    def add(self, message: str, *path: object) -> None:
        self._messages.setdefault(build_path(path), []).append(message)

    def merge(self, other: "ErrorCollector", *prefix: object) -> None:
        """Re-insert every entry of *other* with *prefix* prepended."""
        for path, messages in other.to_dict().items():
            key = build_path((*prefix, path))
            self._messages.setdefault(key, []).extend(messages)

    def has(self, path: str) -> bool:
        return path in self._messages

    def get(self, path: str) -> List[str]:
        return list(self._messages.get(path, []))

    def first(self, path: str) -> Optional[str]:
        messages = self._messages.get(path)
        return messages[0] if messages else None

    def get_from_form_name(self, name: str) -> List[str]:
        return self.get(form_name_to_path(name))

    def first_from_form_name(self, name: str) -> Optional[str]:
        return self.first(form_name_to_path(name))

    def all(self) -> List[str]:
        return [message for messages in self._messages.values() for message in messages]

    def paths(self) -> List[str]:
        return list(self._messages)

    def flat(self) -> Dict[str, str]:
        """First message per path."""
        return {path: messages[0] for path, messages in self._messages.items()}

    def to_dict(self) -> Dict[str, List[str]]:
        return {path: list(messages) for path, messages in self._messages.items()}

    def is_empty(self) -> bool:
        return not self._messages

    def __repr__(self) -> str:
        return f"ErrorCollector({self._messages!r})"
