"""Declaration registry entities."""

from __future__ import annotations

from dataclasses import dataclass

from cosmwasm_bindings.configuration.runtime_settings import CONFLICT_POLICY_ERROR


class DeclarationConflictError(Exception):
    """Raised when two contracts declare the same shared name differently."""


@dataclass(frozen=True)
class DeclarationToken:
    """Exact source text of one top-level declaration and the module it came from."""

    name: str
    text: str
    module: str


class DeclarationRegistry:
    """Shared declarations keyed by name, in first-registration order."""

    def __init__(self, *, conflict_policy: str = CONFLICT_POLICY_ERROR) -> None:
        self._conflict_policy = conflict_policy
        self._tokens: dict[str, DeclarationToken] = {}

    def register(self, token: DeclarationToken) -> bool:
        """Register ``token`` unless its name is taken; return True when it was added."""
        existing = self._tokens.get(token.name)
        if existing is None:
            self._tokens[token.name] = token
            return True
        if self._conflict_policy == CONFLICT_POLICY_ERROR and _normalized(
            existing.text
        ) != _normalized(token.text):
            raise DeclarationConflictError(
                f"'{token.name}' is declared differently in {existing.module} and {token.module}."
            )
        return False

    def __contains__(self, name: object) -> bool:
        return name in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def names(self) -> tuple[str, ...]:
        return tuple(self._tokens)

    def tokens(self) -> tuple[DeclarationToken, ...]:
        return tuple(self._tokens.values())


def _normalized(text: str) -> str:
    return " ".join(text.split())
