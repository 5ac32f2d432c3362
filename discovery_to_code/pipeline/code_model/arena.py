"""
Code Model arena.

Every declaration of a generation session lives in one list and is
addressed by its index. Decorators receive indices and append members
through the arena, so exactly one writer touches the tree at a time and
no decorator keeps a reference to another decorator's nodes.
"""

from __future__ import annotations

from collections.abc import Iterable

from ...utils import CS_RESERVED_KEYWORDS, make_safe_identifier
from ..errors import IdentifierCollisionError
from .nodes import ClassDecl, Declaration, MethodDecl


class CodeModel:
    """Arena of declarations for one generation session."""

    def __init__(self, reserved_words: Iterable[str] = CS_RESERVED_KEYWORDS):
        """
        Initialize the arena.

        Args:
            reserved_words: Words no member name may take (case-insensitive)
        """
        self.reserved_words = frozenset(reserved_words)
        self._nodes: list[Declaration] = []
        self._top_level: list[int] = []
        # (owner, index) of every insertion, for rollback; owner None = top level
        self._journal: list[tuple[int | None, int]] = []
        self._frozen = False

    # Reading

    def get(self, index: int) -> Declaration:
        """Get a declaration by index."""
        return self._nodes[index]

    def get_class(self, index: int) -> ClassDecl:
        """Get a class declaration by index."""
        node = self._nodes[index]
        if not isinstance(node, ClassDecl):
            raise TypeError(f"Declaration {index} ({node.name}) is not a class")
        return node

    def members(self, owner: int) -> list[Declaration]:
        """Members of a class, in insertion order."""
        return [self._nodes[i] for i in self.get_class(owner).members]

    def member_names(self, owner: int | None) -> set[str]:
        """Names already used in a scope (a class, or the top level for None)."""
        indices = self._top_level if owner is None else self.get_class(owner).members
        return {self._nodes[i].name for i in indices}

    def find_member(self, owner: int, name: str) -> int | None:
        """Index of the member with that name, if any."""
        for i in self.get_class(owner).members:
            if self._nodes[i].name == name:
                return i
        return None

    def top_level(self) -> list[int]:
        """Indices of top-level declarations, in insertion order."""
        return list(self._top_level)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._nodes)

    # Naming

    def safe_member_name(
        self,
        owner: int | None,
        candidate: str | None,
        unique_suffix: str,
        extra_reserved: Iterable[str] = (),
    ) -> str:
        """
        Sanitize a candidate name against keywords and the names already in a scope.

        The enclosing class name is reserved too, since a member cannot share it.
        The result may still collide when candidate + suffix is taken as well;
        add_member then raises IdentifierCollisionError.
        """
        reserved = set(self.reserved_words) | self.member_names(owner) | set(extra_reserved)
        if owner is not None:
            reserved.add(self.get(owner).name)
        return make_safe_identifier(candidate, unique_suffix, reserved)

    # Writing

    def add_class(self, decl: ClassDecl, parent: int | None = None) -> int:
        """Add a class, top-level or nested in `parent`."""
        if parent is None:
            return self._insert(None, decl)
        return self.add_member(parent, decl)

    def add_member(self, owner: int, decl: Declaration) -> int:
        """
        Append a member to a class.

        Raises:
            IdentifierCollisionError: If the class already has a member with that name
        """
        return self._insert(owner, decl)

    def _insert(self, owner: int | None, decl: Declaration) -> int:
        self._check_writable()
        if decl.name in self.member_names(owner):
            scope = "top level" if owner is None else self.get(owner).name
            raise IdentifierCollisionError(f"'{decl.name}' is already declared in {scope}", location=scope)
        if owner is not None and decl.name == self.get(owner).name and not _is_constructor(decl):
            raise IdentifierCollisionError(f"Member '{decl.name}' has the same name as its class", location=decl.name)

        index = len(self._nodes)
        decl.parent = owner
        self._nodes.append(decl)
        if owner is None:
            self._top_level.append(index)
        else:
            self.get_class(owner).members.append(index)
        self._journal.append((owner, index))
        return index

    def mark(self) -> int:
        """A point the arena can be rolled back to."""
        return len(self._journal)

    def rollback(self, mark: int) -> None:
        """Discard every declaration inserted since `mark`."""
        self._check_writable()
        while len(self._journal) > mark:
            owner, index = self._journal.pop()
            if owner is None:
                self._top_level.remove(index)
            else:
                self.get_class(owner).members.remove(index)
            self._nodes.pop()

    def freeze(self) -> None:
        """Make the arena read-only; done before rendering."""
        self._frozen = True

    def _check_writable(self) -> None:
        if self._frozen:
            raise RuntimeError("Code model is frozen and can no longer be modified")


def _is_constructor(decl: Declaration) -> bool:
    return isinstance(decl, MethodDecl) and decl.is_constructor
