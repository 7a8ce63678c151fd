import pytest

from core.services.paging import collect_pages, merge_page_params, page_window


class TestPageWindow:
    def test_first_page_starts_at_zero(self):
        assert page_window(1, 20) == (20, 0)

    @pytest.mark.parametrize(("page", "size", "offset"), [(2, 20, 20), (3, 10, 20), (7, 1, 6)])
    def test_offset_is_page_minus_one_times_size(self, page, size, offset):
        assert page_window(page, size) == (size, offset)

    def test_rejects_page_zero(self):
        with pytest.raises(ValueError, match="page must be >= 1"):
            page_window(0, 20)

    def test_rejects_empty_page_size(self):
        with pytest.raises(ValueError, match="page_size"):
            page_window(1, 0)


class TestMergePageParams:
    def test_adds_window_when_absent(self):
        assert merge_page_params({"owner": "0x1"}, page=2, page_size=5) == {
            "limit": 5,
            "offset": 5,
            "owner": "0x1",
        }

    def test_explicit_values_win(self):
        merged = merge_page_params({"limit": 3}, page=4, page_size=5)
        assert merged["limit"] == 3
        assert merged["offset"] == 15


@pytest.mark.anyio
async def test_collect_pages_stops_on_first_empty_page():
    requested: list[int] = []
    data = {1: ["a", "b"], 2: ["c"], 3: [], 4: ["never"]}

    async def fetch(page: int) -> list[str]:
        requested.append(page)
        return data[page]

    items = await collect_pages(fetch, pages=4)

    assert items == ["a", "b", "c"]
    assert requested == [1, 2, 3]


@pytest.mark.anyio
async def test_collect_pages_honours_start_page():
    async def fetch(page: int) -> list[int]:
        return [page]

    assert await collect_pages(fetch, pages=2, start_page=5) == [5, 6]
