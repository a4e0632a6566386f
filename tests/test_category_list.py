import pytest
from storefront_admin.admin.category_list import CategoryListController, blockers_for, build_tree
from storefront_admin.admin.client import ApiError
from storefront_admin.utils.category_rules import (
    BLOCKED_BY_PRODUCTS,
    BLOCKED_BY_SUBCATEGORIES,
    can_delete,
    delete_blockers,
)


def category(id, parent_id=None, products=0, children=()):
    return {
        "id": id,
        "name": id.title(),
        "slug": id,
        "parentId": parent_id,
        "_count": {"products": products},
        "children": [{"id": c} for c in children],
    }


class FakeListClient:
    def __init__(self, categories, delete_error=None, list_error=None):
        self.categories = categories
        self.delete_error = delete_error
        self.list_error = list_error
        self.deleted = []

    def list_categories(self):
        if self.list_error:
            raise ApiError(self.list_error)
        return self.categories

    def delete_category(self, category_id):
        if self.delete_error:
            raise ApiError(self.delete_error, 409)
        self.deleted.append(category_id)


@pytest.mark.parametrize("products, children, expected", [
    (0, 0, []),
    (3, 0, [BLOCKED_BY_PRODUCTS]),
    (0, 2, [BLOCKED_BY_SUBCATEGORIES]),
    (1, 1, [BLOCKED_BY_PRODUCTS, BLOCKED_BY_SUBCATEGORIES]),
])
def test_delete_blockers(products, children, expected):
    assert delete_blockers(products, children) == expected
    assert can_delete(products, children) == (expected == [])


def test_build_tree_groups_children_under_roots():
    categories = [
        category("women"),
        category("dresses", parent_id="women"),
        category("men"),
        category("shirts", parent_id="men"),
        category("skirts", parent_id="women"),
    ]
    tree = build_tree(categories)

    assert [node.category["id"] for node in tree] == ["women", "men"]
    assert [c["id"] for c in tree[0].children] == ["dresses", "skirts"]
    assert [c["id"] for c in tree[1].children] == ["shirts"]


def test_build_tree_places_every_root_and_child_once():
    categories = [category("a"), category("b", parent_id="a"), category("c"), category("orphan", parent_id="gone")]
    tree = build_tree(categories)
    placed = [node.category["id"] for node in tree] + [c["id"] for node in tree for c in node.children]
    assert sorted(placed) == ["a", "b", "c"]


def test_blockers_for_uses_counts_and_children():
    assert blockers_for(category("a")) == []
    assert blockers_for(category("a", products=2)) == [BLOCKED_BY_PRODUCTS]
    assert blockers_for(category("a", children=["b"])) == [BLOCKED_BY_SUBCATEGORIES]


def test_load_failure_sets_error():
    controller = CategoryListController(FakeListClient([], list_error="Failed to fetch categories"))
    assert controller.load() is False
    assert controller.error == "Failed to fetch categories"
    assert controller.loaded


def test_request_delete_refuses_blocked_category():
    controller = CategoryListController(FakeListClient([category("a", products=1)]))
    controller.load()
    assert controller.request_delete("a") is False
    assert controller.pending_delete is None


def test_cancel_delete_leaves_everything_unchanged():
    client = FakeListClient([category("a")])
    controller = CategoryListController(client)
    controller.load()
    assert controller.request_delete("a")
    controller.cancel_delete()

    assert controller.pending_delete is None
    assert controller.confirm_delete() is False
    assert client.deleted == []
    assert [c["id"] for c in controller.categories] == ["a"]


def test_confirm_delete_removes_category_and_frees_parent():
    categories = [category("women", children=["dresses"]), category("dresses", parent_id="women")]
    client = FakeListClient(categories)
    controller = CategoryListController(client)
    controller.load()

    assert blockers_for(controller.find("women")) == [BLOCKED_BY_SUBCATEGORIES]
    assert controller.request_delete("dresses")
    assert controller.confirm_delete() is True

    assert client.deleted == ["dresses"]
    assert [c["id"] for c in controller.categories] == ["women"]
    assert blockers_for(controller.find("women")) == []


def test_confirm_delete_failure_keeps_state():
    client = FakeListClient([category("a")], delete_error="Cannot delete category with products.")
    controller = CategoryListController(client)
    controller.load()
    controller.request_delete("a")

    assert controller.confirm_delete() is False
    assert controller.error == "Cannot delete category with products."
    assert [c["id"] for c in controller.categories] == ["a"]


def test_build_tree_small_example():
    tree = build_tree([
        {"id": "1", "parentId": None},
        {"id": "2", "parentId": "1"},
        {"id": "3", "parentId": None},
    ])
    assert {node.category["id"] for node in tree} == {"1", "3"}
    assert [c["id"] for c in tree[0].children] == ["2"]
    assert tree[1].children == []


def test_request_delete_refuses_category_with_children():
    controller = CategoryListController(FakeListClient([category("a", children=["b"]), category("b", parent_id="a")]))
    controller.load()
    assert controller.request_delete("a") is False
    assert controller.request_delete("missing") is False
    assert controller.request_delete("b") is True
    assert controller.pending_delete == "b"
