"""
Unit tests for dino-tree data models.
"""

import pytest
from pydantic import ValidationError

from dino_tree.models import Dino, DinoData, DinoNode


class TestDinoData:
    """Tests for the DinoData display payload."""

    def test_optional_fields_default_to_none(self) -> None:
        """Test that only user_id, first_name and picture must be given."""
        data = DinoData(user_id="u1", first_name="Ada", picture="p.png")

        assert data.last_name is None
        assert data.title is None
        assert data.fun_title is None
        assert data.location is None

    def test_first_name_and_picture_are_required_keys(self) -> None:
        """Test that first_name and picture cannot be omitted."""
        with pytest.raises(ValidationError):
            DinoData(user_id="u1", picture="p.png")
        with pytest.raises(ValidationError):
            DinoData(user_id="u1", first_name="Ada")

    def test_required_keys_accept_none(self) -> None:
        """Test that an unresolved first_name or picture may be None."""
        data = DinoData(user_id="u1", first_name=None, picture=None)
        assert data.first_name is None
        assert data.picture is None

    def test_to_dict(self) -> None:
        """Test conversion to a plain dictionary."""
        data = DinoData(user_id="u1", first_name="Ada", last_name="Lovelace", picture="p.png")

        assert data.to_dict() == {
            "user_id": "u1",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "picture": "p.png",
            "title": None,
            "fun_title": None,
            "location": None,
        }

    def test_display_name(self) -> None:
        """Test display name skips missing parts."""
        assert DinoData(user_id="u", first_name="Ada", last_name="L", picture=None).display_name == "Ada L"
        assert DinoData(user_id="u", first_name="Ada", picture=None).display_name == "Ada"
        assert DinoData(user_id="u", first_name=None, picture=None).display_name == ""

    def test_frozen(self) -> None:
        """Test that payloads cannot be modified."""
        data = DinoData(user_id="u1", first_name="Ada", picture="p.png")
        with pytest.raises(ValidationError):
            data.first_name = "Grace"


class TestDino:
    """Tests for the Dino record."""

    def test_blank_manager_is_absent(self, make_dino) -> None:
        """Test that an empty manager id is stored as None."""
        dino = make_dino("u1", "e1", "", "Ada")
        assert dino.manager_id is None

    def test_empty_ids_rejected(self) -> None:
        """Test that user_id and employee_id must be non-empty."""
        data = DinoData(user_id="u1", first_name="Ada", picture=None)
        with pytest.raises(ValidationError):
            Dino(user_id="", employee_id="e1", data=data)
        with pytest.raises(ValidationError):
            Dino(user_id="u1", employee_id="", data=data)

    def test_sort_key(self, make_dino) -> None:
        """Test sort key orders by first then last name, None as empty."""
        assert make_dino("u1", "e1", None, "Ada", "Lovelace").sort_key() == ("Ada", "Lovelace")
        assert make_dino("u2", "e2", None, None, None).sort_key() == ("", "")


class TestDinoNode:
    """Tests for the DinoNode arena slot."""

    def test_root_without_children(self, make_dino) -> None:
        """Test a childless root."""
        node = DinoNode(parent=-1, first_child=None, num_children=0, dino=make_dino("u1", "e1", None, "A"))

        assert node.is_root is True
        assert list(node.children_range) == []

    def test_children_range(self, make_dino) -> None:
        """Test children block indices."""
        node = DinoNode(parent=0, first_child=3, num_children=2, dino=make_dino("u1", "e1", "e0", "A"))

        assert node.is_root is False
        assert list(node.children_range) == [3, 4]

    def test_children_block_at_zero(self, make_dino) -> None:
        """Test that a block starting at index 0 is still a block."""
        node = DinoNode(parent=-1, first_child=0, num_children=1, dino=make_dino("u1", "e1", None, "A"))
        assert list(node.children_range) == [0]
