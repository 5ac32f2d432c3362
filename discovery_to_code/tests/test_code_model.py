"""
Tests for the Code Model arena.
"""

from __future__ import annotations

import pytest

from discovery_to_code.pipeline.code_model import ClassDecl, CodeModel, ConstantDecl, MethodDecl, PropertyDecl
from discovery_to_code.pipeline.errors import IdentifierCollisionError


class TestArena:
    """Tests for adding and reading declarations."""

    def test_add_class_and_members(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        title = model.add_member(cls, PropertyDecl(name="Title", type_name="string"))
        kind = model.add_member(cls, ConstantDecl(name="Kind", value="books#shelf"))

        assert model.top_level() == [cls]
        assert [m.name for m in model.members(cls)] == ["Title", "Kind"]
        assert model.get(title).parent == cls
        assert model.find_member(cls, "Kind") == kind
        assert model.find_member(cls, "Missing") is None
        assert len(model) == 3

    def test_nested_class(self):
        model = CodeModel()
        outer = model.add_class(ClassDecl(name="Outer"))
        inner = model.add_class(ClassDecl(name="Inner"), parent=outer)

        assert model.top_level() == [outer]
        assert model.get_class(outer).members == [inner]

    def test_get_class_rejects_members(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        prop = model.add_member(cls, PropertyDecl(name="Title", type_name="string"))
        with pytest.raises(TypeError):
            model.get_class(prop)

    def test_duplicate_member_raises(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        model.add_member(cls, PropertyDecl(name="Title", type_name="string"))
        with pytest.raises(IdentifierCollisionError):
            model.add_member(cls, PropertyDecl(name="Title", type_name="string"))

    def test_duplicate_top_level_raises(self):
        model = CodeModel()
        model.add_class(ClassDecl(name="Shelf"))
        with pytest.raises(IdentifierCollisionError):
            model.add_class(ClassDecl(name="Shelf"))

    def test_member_named_like_class_raises(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        with pytest.raises(IdentifierCollisionError):
            model.add_member(cls, PropertyDecl(name="Shelf", type_name="string"))

    def test_constructor_takes_class_name(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        model.add_member(cls, MethodDecl(name="Shelf", is_constructor=True))
        assert [m.name for m in model.members(cls)] == ["Shelf"]


class TestSafeMemberName:
    """Tests for name disambiguation inside a scope."""

    def test_keyword(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        assert model.safe_member_name(cls, "Class", "Value") == "ClassValue"

    def test_existing_member(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        model.add_member(cls, PropertyDecl(name="Name", type_name="string"))
        assert model.safe_member_name(cls, "Name", "Value") == "NameValue"
        assert model.safe_member_name(cls, "Title", "Value") == "Title"

    def test_class_name_is_reserved(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        assert model.safe_member_name(cls, "Shelf", "Value") == "ShelfValue"

    def test_extra_reserved(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        assert model.safe_member_name(cls, "ETag", "Value", extra_reserved={"ETag"}) == "ETagValue"

    def test_top_level_scope(self):
        model = CodeModel()
        model.add_class(ClassDecl(name="Shelf"))
        assert model.safe_member_name(None, "Shelf", "Value") == "ShelfValue"


class TestLifecycle:
    """Tests for rollback and freezing."""

    def test_rollback_discards_everything_since_mark(self):
        model = CodeModel()
        keep = model.add_class(ClassDecl(name="Keep"))
        model.add_member(keep, PropertyDecl(name="A", type_name="string"))

        mark = model.mark()
        drop = model.add_class(ClassDecl(name="Drop"))
        model.add_member(drop, PropertyDecl(name="B", type_name="string"))
        model.add_member(keep, PropertyDecl(name="C", type_name="string"))
        model.rollback(mark)

        assert model.top_level() == [keep]
        assert [m.name for m in model.members(keep)] == ["A"]
        assert len(model) == 2

        # Names freed by the rollback can be used again
        model.add_class(ClassDecl(name="Drop"))
        model.add_member(keep, PropertyDecl(name="C", type_name="string"))

    def test_frozen_model_rejects_changes(self):
        model = CodeModel()
        cls = model.add_class(ClassDecl(name="Shelf"))
        model.freeze()

        assert model.frozen
        with pytest.raises(RuntimeError):
            model.add_member(cls, PropertyDecl(name="Title", type_name="string"))
        with pytest.raises(RuntimeError):
            model.add_class(ClassDecl(name="Other"))
        with pytest.raises(RuntimeError):
            model.rollback(0)
