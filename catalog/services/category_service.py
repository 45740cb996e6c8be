from catalog.extensions import db
from catalog.models.category import Category


def get_all():
    return Category.query.order_by(Category.name).all()


def get_by_id(category_id):
    if category_id is None:
        return None
    return db.session.get(Category, category_id)


def get_select_options(selected_id=None):
    """Categories for a form dropdown as ``(id, name, selected)`` triples."""
    return [(c.id, c.name, c.id == selected_id) for c in get_all()]


def get_or_create(name):
    """Return the category called ``name``, creating it if needed."""
    name = name.strip()
    if not name:
        raise ValueError("Category name is required.")
    category = Category.query.filter_by(name=name).first()
    if category:
        return category, False
    category = Category(name=name)
    db.session.add(category)
    db.session.commit()
    return category, True
