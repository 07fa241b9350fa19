"""Tests for BasketStore."""

from dataclasses import replace

from storefront.services import BasketStore


class TestAdd:
    """Tests for BasketStore.add()."""

    def test_add_appends_in_insertion_order(self, product_a, product_c):
        basket = BasketStore()
        basket.add(product_c)
        basket.add(product_a)
        assert [p.id for p in basket.get_all()] == ["c", "a"]

    def test_add_twice_is_idempotent(self, product_a, product_c):
        once = BasketStore()
        once.add(product_a)
        once.add(product_c)

        twice = BasketStore()
        assert twice.add(product_a) is True
        twice.add(product_c)
        assert twice.add(product_a) is False

        assert twice.get_all() == once.get_all()
        assert twice.get_all()[0].id == "a"

    def test_add_unavailable_is_noop(self, product_b):
        basket = BasketStore()
        assert basket.add(product_b) is False
        assert basket.get_all() == []
        assert not basket.has("b")

    def test_duplicate_id_with_other_fields_ignored(self, product_a):
        basket = BasketStore()
        basket.add(product_a)
        basket.add(replace(product_a, title="Другое имя", price=900))
        assert basket.count == 1
        assert basket.get_all()[0].title == product_a.title


class TestRemove:
    """Tests for BasketStore.remove()."""

    def test_remove_present(self, product_a, product_c):
        basket = BasketStore()
        basket.add(product_a)
        basket.add(product_c)
        assert basket.remove("a") is True
        assert [p.id for p in basket.get_all()] == ["c"]

    def test_remove_absent_is_noop(self, product_a):
        basket = BasketStore()
        basket.add(product_a)
        before = basket.get_all()
        assert basket.remove("absent-id") is False
        assert basket.get_all() == before


class TestTotal:
    """Tests for BasketStore.get_total()."""

    def test_empty_total_is_zero(self):
        assert BasketStore().get_total() == 0

    def test_total_skips_unavailable_prices(self, product_a, product_c):
        basket = BasketStore()
        basket.add(product_a)
        basket.add(product_c)
        assert basket.get_total() == 750

    def test_total_with_null_price_in_store(self, product_a, product_b, product_c):
        # Unavailable items can't be added, but must count as zero if present
        basket = BasketStore()
        basket._items = {p.id: p for p in (product_a, product_b, product_c)}
        assert basket.get_total() == 750


class TestSnapshot:
    """Tests for get_all() isolation, has() and clear()."""

    def test_get_all_returns_copy(self, product_a):
        basket = BasketStore()
        basket.add(product_a)
        items = basket.get_all()
        items.clear()
        assert basket.has("a")
        assert len(basket) == 1

    def test_contains_and_has(self, product_a):
        basket = BasketStore()
        basket.add(product_a)
        assert basket.has("a")
        assert "a" in basket
        assert "c" not in basket

    def test_clear(self, product_a, product_c):
        basket = BasketStore()
        basket.add(product_a)
        basket.add(product_c)
        basket.clear()
        assert basket.is_empty
        assert basket.get_total() == 0
