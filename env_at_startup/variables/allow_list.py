"""Allow-list of variable names with `*` wildcards."""

import re
from typing import Iterable, Optional, Pattern, Tuple, Union


class AllowList:
    """
    Immutable set of variable name patterns.

    An empty allow-list allows every name. Otherwise a name is allowed when it
    fully matches at least one pattern. `*` matches any run of characters,
    everything else is literal and case-sensitive.
    """

    def __init__(self, tokens: Iterable[str] = ()):
        """Initialize from already-split tokens; blank tokens are ignored."""
        cleaned = [token.strip() for token in tokens]
        self._tokens: Tuple[str, ...] = tuple(token for token in cleaned if token)
        self._patterns: Tuple[Pattern[str], ...] = tuple(
            self._compile(token) for token in self._tokens
        )

    @classmethod
    def parse(cls, value: Optional[Union[str, Iterable[str]]]) -> "AllowList":
        """
        Build an allow-list from a comma separated string or a list of tokens.

        Args:
            value: e.g. "API_URL,NEXT_PUBLIC_*", a list of tokens, or None

        Returns:
            AllowList instance
        """
        if value is None:
            return cls()
        if isinstance(value, str):
            return cls(value.split(','))

        tokens = []
        for item in value:
            tokens.extend(str(item).split(','))
        return cls(tokens)

    @staticmethod
    def _compile(token: str) -> Pattern[str]:
        # Every '*' becomes '.*', not just the first one
        return re.compile('.*'.join(re.escape(part) for part in token.split('*')))

    @property
    def tokens(self) -> Tuple[str, ...]:
        return self._tokens

    def is_allowed(self, name: str) -> bool:
        """Return True if name may be substituted."""
        if not self._patterns:
            return True
        return any(pattern.fullmatch(name) for pattern in self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AllowList):
            return NotImplemented
        return self._tokens == other._tokens

    def __hash__(self) -> int:
        return hash(self._tokens)

    def __repr__(self) -> str:
        return f"AllowList({list(self._tokens)!r})"
