from __future__ import annotations

import pytest

from comics import service
from comics.repository import CatalogStore
from comics.schemas import ComicFilters, ComicInput
from core.errors import NotFoundError, ValidationError


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("12", 12),
        (" 7 ", 7),
        ("2.5", 2),
        ("3abc", 3),
        ("-4", -4),
        ("abc", None),
        ("", None),
        (None, None),
        (5, 5),
        (6.0, 6),
        (6.5, None),
        (True, None),
    ],
)
def test_parse_int(value, expected) -> None:
    assert service.parse_int(value) == expected


class TestListComics:
    def test_defaults_return_everything_on_one_page(self, store: CatalogStore) -> None:
        page = service.list_comics(store, ComicFilters())
        assert [c.id for c in page.data] == [1, 2, 3]
        assert (page.total_items, page.total_pages, page.current_page) == (3, 1, 1)

    def test_second_page_of_two(self, store: CatalogStore) -> None:
        page = service.list_comics(store, ComicFilters(), page="2", limit="2")
        assert [c.title for c in page.data] == ["Maus"]
        assert page.total_items == 3
        assert page.total_pages == 2
        assert page.current_page == 2

    def test_out_of_range_page_is_empty_not_an_error(self, store: CatalogStore) -> None:
        page = service.list_comics(store, ComicFilters(), page="9")
        assert page.data == []
        assert page.current_page == 9

    def test_non_numeric_paging_falls_back_to_defaults(self, store: CatalogStore) -> None:
        page = service.list_comics(store, ComicFilters(), page="first", limit="many")
        assert page.current_page == 1
        assert len(page.data) == 3

    def test_text_filters_are_case_insensitive_substrings(self, store: CatalogStore) -> None:
        page = service.list_comics(store, ComicFilters(author="MILLER"))
        assert [c.id for c in page.data] == [1]

        page = service.list_comics(store, ComicFilters(publisher="pantheon"))
        assert [c.id for c in page.data] == [3]

    def test_filters_are_combined(self, store: CatalogStore) -> None:
        page = service.list_comics(store, ComicFilters(genre="hero", year="1986", author="moore"))
        assert [c.title for c in page.data] == ["Watchmen"]

    def test_year_is_exact_match(self, store: CatalogStore) -> None:
        assert service.list_comics(store, ComicFilters(year="1986")).total_items == 2
        assert service.list_comics(store, ComicFilters(year="198")).total_items == 0
        assert service.list_comics(store, ComicFilters(year="soon")).total_items == 0

    def test_negative_limit_follows_slice_arithmetic(self, store: CatalogStore) -> None:
        page = service.list_comics(store, ComicFilters(), limit="-1")
        assert [c.id for c in page.data] == [1, 2]
        assert page.total_items == 3
        assert page.total_pages == -3
        assert page.current_page == 1

    def test_total_items_counts_before_pagination(self, store: CatalogStore) -> None:
        page = service.list_comics(store, ComicFilters(publisher="dc"), limit="1")
        assert len(page.data) == 1
        assert page.total_items == 2
        assert page.total_pages == 2


class TestCreateComic:
    def test_applies_defaults_and_next_id(self, store: CatalogStore) -> None:
        comic = service.create_comic(store, ComicInput(title="Sandman", author="Neil Gaiman", year=1989))
        assert comic.id == 4
        assert comic.publisher == "Unknown"
        assert comic.genre == "Unspecified"
        assert comic.description == ""
        assert store.list_all()[-1] == comic

    def test_year_text_is_parsed(self, store: CatalogStore) -> None:
        comic = service.create_comic(store, ComicInput(title="Bone", author="Jeff Smith", year="1991"))
        assert comic.year == 1991

    @pytest.mark.parametrize(
        "payload",
        [
            ComicInput(author="A", year=2000),
            ComicInput(title="T", year=2000),
            ComicInput(title="T", author="A"),
            ComicInput(title="T", author="A", year=0),
            ComicInput(title="", author="A", year=2000),
        ],
    )
    def test_missing_required_field_is_rejected(self, store: CatalogStore, payload: ComicInput) -> None:
        with pytest.raises(ValidationError, match="required fields"):
            service.create_comic(store, payload)
        assert len(store) == 3

    def test_unparsable_year_is_rejected(self, store: CatalogStore) -> None:
        with pytest.raises(ValidationError):
            service.create_comic(store, ComicInput(title="T", author="A", year="someday"))

    def test_sequential_creates_get_consecutive_ids(self, store: CatalogStore) -> None:
        ids = [
            service.create_comic(store, ComicInput(title=f"T{i}", author="A", year=2000)).id
            for i in range(3)
        ]
        assert ids == [4, 5, 6]


class TestUpdateComic:
    def test_partial_update_keeps_other_fields(self, store: CatalogStore) -> None:
        before = store.find(2)
        updated = service.update_comic(store, "2", ComicInput(genre="Mystery", year="1987"))
        assert updated.genre == "Mystery"
        assert updated.year == 1987
        assert updated.title == before.title
        assert updated.id == 2
        assert store.find(2) == updated

    def test_empty_payload_changes_nothing(self, store: CatalogStore) -> None:
        before = store.find(1)
        assert service.update_comic(store, "1", ComicInput()) == before

    def test_unknown_id_is_not_found(self, store: CatalogStore) -> None:
        with pytest.raises(NotFoundError, match="Comic with ID 42 not found"):
            service.update_comic(store, "42", ComicInput(title="x"))

    def test_unparsable_year_is_rejected_and_record_kept(self, store: CatalogStore) -> None:
        before = store.find(1)
        with pytest.raises(ValidationError, match="Year must be an integer"):
            service.update_comic(store, "1", ComicInput(year="someday"))
        assert store.find(1) == before

    def test_null_field_keeps_stored_value(self, store: CatalogStore) -> None:
        updated = service.update_comic(store, "3", ComicInput(title=None, genre="Memoir"))
        assert updated.title == "Maus"
        assert updated.genre == "Memoir"

    def test_not_found_message_shows_parsed_id(self, store: CatalogStore) -> None:
        with pytest.raises(NotFoundError, match="Comic with ID 42 not found"):
            service.update_comic(store, "042", ComicInput(title="x"))


class TestGetAndDelete:
    def test_get_by_text_id(self, store: CatalogStore) -> None:
        assert service.get_comic(store, "3").title == "Maus"

    def test_get_unparsable_id_is_not_found(self, store: CatalogStore) -> None:
        with pytest.raises(NotFoundError, match="Comic with ID batman not found"):
            service.get_comic(store, "batman")

    def test_delete_returns_snapshot(self, store: CatalogStore) -> None:
        deleted = service.delete_comic(store, "1")
        assert deleted.title.startswith("Batman")
        assert store.find(1) is None

    def test_delete_unknown_id(self, store: CatalogStore) -> None:
        with pytest.raises(NotFoundError):
            service.delete_comic(store, "99")

    def test_delete_highest_then_create_reuses_id(self, store: CatalogStore) -> None:
        service.delete_comic(store, "3")
        comic = service.create_comic(store, ComicInput(title="T", author="A", year=2000))
        assert comic.id == 3


class TestBulkCreate:
    def test_partial_success(self, store: CatalogStore) -> None:
        result = service.bulk_create(
            store,
            [{"title": "A", "author": "B", "year": 2000}, {"author": "C"}],
        )
        assert [c.id for c in result.added] == [4]
        assert result.failed == [
            {"comic": {"author": "C"}, "reason": "Title, author, and year are required fields"}
        ]
        assert result.message == "Successfully added 1 comics, failed to add 1 comics"

    def test_valid_items_get_consecutive_ids(self, store: CatalogStore) -> None:
        items = [{"title": f"T{i}", "author": "A", "year": 2000 + i} for i in range(3)]
        result = service.bulk_create(store, items)
        assert [c.id for c in result.added] == [4, 5, 6]

    def test_malformed_items_are_reported(self, store: CatalogStore) -> None:
        result = service.bulk_create(store, ["not a comic", {"title": {"x": 1}, "author": "A", "year": 1}])
        assert result.added == []
        assert len(result.failed) == 2
        assert result.failed[0]["reason"] == "Each comic must be a JSON object"
        assert result.failed[1]["reason"].startswith("Invalid value for title")

    @pytest.mark.parametrize("items", [[], {}, None, "comics"])
    def test_body_must_be_non_empty_list(self, store: CatalogStore, items) -> None:
        with pytest.raises(ValidationError, match="non-empty array of comics"):
            service.bulk_create(store, items)


class TestBulkDelete:
    def test_repeated_id_is_found_once(self, store: CatalogStore) -> None:
        result = service.bulk_delete(store, [1, 1])
        assert [c.id for c in result.deleted] == [1]
        assert result.not_found == [1]
        assert result.message == "Successfully deleted 1 comics, could not find 1 comics"

    def test_text_ids_are_parsed_and_echoed_when_missing(self, store: CatalogStore) -> None:
        result = service.bulk_delete(store, ["2", "77", "x"])
        assert [c.id for c in result.deleted] == [2]
        assert result.not_found == ["77", "x"]
        assert [c.id for c in store.list_all()] == [1, 3]

    @pytest.mark.parametrize("ids", [[], None, "1,2", {"id": 1}])
    def test_ids_must_be_non_empty_list(self, store: CatalogStore, ids) -> None:
        with pytest.raises(ValidationError, match="non-empty array of ids"):
            service.bulk_delete(store, ids)
        assert len(store) == 3
