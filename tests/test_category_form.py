import pytest
from storefront_admin.admin.category_form import CategoryForm, CategoryFormController, parent_candidates
from storefront_admin.admin.client import ApiError, ValidationError

CATEGORIES = [
    {"id": "c1", "name": "Women", "slug": "women", "parentId": None},
    {"id": "c2", "name": "Dresses", "slug": "dresses", "parentId": "c1"},
    {"id": "c3", "name": "Men", "slug": "men", "parentId": None},
]


class FakeCategoryClient:
    def __init__(self, categories=CATEGORIES, error=None):
        self.categories = categories
        self.error = error
        self.created = []
        self.updated = []

    def list_categories(self):
        return self.categories

    def get_category(self, category_id):
        return next(c for c in self.categories if c["id"] == category_id)

    def create_category(self, payload):
        if self.error:
            raise ApiError(self.error, 409)
        self.created.append(payload)
        return dict(payload, id="new")

    def update_category(self, category_id, payload):
        if self.error:
            raise ApiError(self.error, 400)
        self.updated.append((category_id, payload))
        return dict(payload, id=category_id)


def test_parent_candidates_are_roots_other_than_self():
    assert [c["id"] for c in parent_candidates(CATEGORIES)] == ["c1", "c3"]
    assert [c["id"] for c in parent_candidates(CATEGORIES, editing_id="c1")] == ["c3"]


def test_name_change_derives_slug():
    form = CategoryForm()
    form.set_name("Summer Dresses")
    assert form.slug == "summer-dresses"


def test_name_change_overwrites_manual_slug_by_default():
    form = CategoryForm()
    form.set_slug("custom")
    form.set_name("New Name")
    assert form.slug == "new-name"


def test_protected_manual_slug_survives_name_change():
    form = CategoryForm(protect_manual_slug=True)
    form.set_name("First")
    form.set_slug("custom")
    form.set_name("Second")
    assert form.slug == "custom"

    form.set_slug("")
    form.set_name("Third")
    assert form.slug == "third"


@pytest.mark.parametrize("name, slug", [("", "x"), ("  ", "x"), ("Name", ""), ("Name", "   ")])
def test_validate_requires_name_and_slug(name, slug):
    form = CategoryForm(name=name, slug=slug)
    with pytest.raises(ValidationError, match="Name and slug are required"):
        form.validate_fields()


def test_payload_sends_empty_optionals_as_null():
    form = CategoryForm(name="Shoes", slug="shoes")
    assert form.to_payload() == {
        "name": "Shoes",
        "slug": "shoes",
        "description": None,
        "image": None,
        "parentId": None,
    }


def test_local_validation_failure_sends_nothing():
    client = FakeCategoryClient()
    controller = CategoryFormController(client)
    controller.load_for_create()

    assert controller.submit() is False
    assert controller.error == "Name and slug are required"
    assert client.created == []


def test_create_success_redirects():
    client = FakeCategoryClient()
    controller = CategoryFormController(client)
    controller.load_for_create()
    controller.form.set_name("Summer Dresses")
    controller.form.parent_id = "c1"

    assert controller.submit() is True
    assert controller.redirect_to == "/admin/categories"
    assert client.created[0]["slug"] == "summer-dresses"
    assert client.created[0]["parentId"] == "c1"


def test_server_error_is_shown_verbatim_and_input_kept():
    client = FakeCategoryClient(error="A category with this slug already exists")
    controller = CategoryFormController(client)
    controller.form.set_name("Women")

    assert controller.submit() is False
    assert controller.error == "A category with this slug already exists"
    assert controller.redirect_to is None
    assert controller.form.name == "Women"
    assert controller.form.slug == "women"


def test_load_for_edit_prefills_form_and_excludes_self():
    client = FakeCategoryClient()
    controller = CategoryFormController(client)

    assert controller.load_for_edit("women") is True
    assert controller.form.name == "Women"
    assert controller.form.parent_id == ""
    assert [c["id"] for c in controller.parent_options] == ["c3"]

    controller.form.description = "All women's clothing"
    assert controller.submit() is True
    category_id, payload = client.updated[0]
    assert category_id == "c1"
    assert payload["description"] == "All women's clothing"


def test_load_for_edit_unknown_slug_is_not_found():
    controller = CategoryFormController(FakeCategoryClient())
    assert controller.load_for_edit("nope") is False
    assert controller.not_found
    assert controller.state == "not_found"
    assert controller.submit() is False
    assert controller.error == "Category not found"
