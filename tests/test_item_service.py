"""
Tests for the item service (submission flow and read paths).

Run:
    pytest tests/test_item_service.py -v
"""

import hashlib

import pytest

from catalog_service.adapters.secondary.database.orm import CategoryModel
from catalog_service.application.services import ItemService
from catalog_service.core.domain.errors import NotFound, PersistenceError, ValidationError
from catalog_service.core.domain.models import Item, ItemSummary
from tests.sample_data import JACKET_BYTES, PLACEHOLDER_BYTES, SCARF_BYTES


class FailingItemRepository:
    def create(self, name, category, image_name):
        raise PersistenceError("disk full")


# ============================================================================
# SUBMISSION
# ============================================================================

class TestSubmitItem:

    def test_submit_then_get(self, item_service):
        """Test: Scenario jacket/fashion returns id 1 and the content address."""
        item_id = item_service.submit_item("jacket", "fashion", JACKET_BYTES)

        assert item_id == 1
        assert item_service.get_item(item_id) == Item(
            id=1,
            name="jacket",
            category="fashion",
            image_name=hashlib.sha256(JACKET_BYTES).hexdigest() + ".jpg",
        )

    def test_second_item_shares_category(self, item_service, session_factory):
        item_service.submit_item("jacket", "fashion", JACKET_BYTES)
        item_service.submit_item("scarf", "fashion", SCARF_BYTES)

        with session_factory() as session:
            assert session.query(CategoryModel).filter_by(name="fashion").count() == 1

    def test_stored_image_is_served(self, item_service):
        item_id = item_service.submit_item("jacket", "fashion", JACKET_BYTES)
        image_name = item_service.get_item(item_id).image_name

        assert item_service.get_image(image_name) == JACKET_BYTES

    def test_same_image_for_two_items(self, item_service, image_dir):
        """Test: Identical uploads are stored once."""
        first = item_service.submit_item("jacket", "fashion", JACKET_BYTES)
        second = item_service.submit_item("jacket copy", "fashion", JACKET_BYTES)

        assert item_service.get_item(first).image_name == item_service.get_item(second).image_name
        assert len([p for p in image_dir.iterdir() if p.name != "default.jpg"]) == 1

    @pytest.mark.parametrize("name,category,image", [
        ("", "fashion", JACKET_BYTES),
        ("   ", "fashion", JACKET_BYTES),
        ("jacket", "", JACKET_BYTES),
        ("jacket", "fashion", b""),
    ])
    def test_missing_input_is_rejected(self, item_service, name, category, image):
        with pytest.raises(ValidationError):
            item_service.submit_item(name, category, image)

        assert item_service.list_items() == []

    def test_repository_failure_propagates(self, memory_image_store):
        service = ItemService(FailingItemRepository(), memory_image_store)

        with pytest.raises(PersistenceError):
            service.submit_item("jacket", "fashion", JACKET_BYTES)


# ============================================================================
# READ PATHS
# ============================================================================

class TestQueries:

    def test_search_scenario(self, item_service):
        item_service.submit_item("jacket", "fashion", JACKET_BYTES)

        assert item_service.search_items("jack") == [ItemSummary(name="jacket", category="fashion")]
        assert item_service.search_items("shoe") == []

    def test_list_items(self, item_service):
        item_service.submit_item("jacket", "fashion", JACKET_BYTES)
        item_service.submit_item("scarf", "fashion", SCARF_BYTES)

        assert [item.name for item in item_service.list_items()] == ["jacket", "scarf"]

    def test_unknown_item(self, item_service):
        with pytest.raises(NotFound):
            item_service.get_item(999)

    def test_item_id_given_as_text(self, item_service):
        item_id = item_service.submit_item("jacket", "fashion", JACKET_BYTES)

        assert item_service.get_item(str(item_id)).name == "jacket"

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", True])
    def test_malformed_item_id_is_rejected(self, item_service, raw):
        with pytest.raises(ValidationError):
            item_service.get_item(raw)

    def test_unknown_image_gets_placeholder(self, item_service):
        assert item_service.get_image("missing.jpg") == PLACEHOLDER_BYTES
