# tests/test_equality.py
import unittest

from immutableui import Bindings, StructuralElement, children, description_hash, descriptions_equal, scalar
from immutableui.equality import HASH_FACTOR, HASH_SEED


class Shape:
    name: str
    tags: list
    parts: list

    def __init__(self):
        self.name = ""
        self.tags = []
        self.parts = []


class Circle(Shape):
    radius: float
    label: str

    def __init__(self):
        super().__init__()
        self.radius = 1.0
        self.label = ""


reg = Bindings("shapes")
shape = reg.bind(Shape, [scalar("name", ""), scalar("tags", None), children("parts")], structural=True)
circle = reg.bind(Circle, [
    scalar("radius", 1.0),
    scalar("label", "", equality=lambda a, b: a.lower() == b.lower()),
])


class Color:
    """Defines equality but no hash."""
    def __init__(self, name):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Color) and other.name == self.name


class Swatch:
    color: object
    meta: dict

    def __init__(self):
        self.color = None
        self.meta = {}


swatch = reg.bind(Swatch, [scalar("color", None), scalar("meta", None)], structural=True)


def fold(seed, values):
    h = seed
    for v in values:
        h = (h * HASH_FACTOR + v) & ((1 << 64) - 1)
    return h


class TestStructuralEquality(unittest.TestCase):

    def test_equal_members_means_equal(self):
        self.assertEqual(circle(name="a", radius=2.0), circle(name="a", radius=2.0))
        self.assertNotEqual(circle(name="a", radius=2.0), circle(name="a", radius=3.0))

    def test_builder_produces_structural_elements(self):
        self.assertIsInstance(circle(), StructuralElement)
        self.assertIsInstance(shape(), StructuralElement)

    def test_inherited_members_take_part(self):
        self.assertNotEqual(circle(name="a"), circle(name="b"))

    def test_omitted_member_equals_explicit_default(self):
        self.assertEqual(circle(radius=1.0), circle())
        self.assertEqual(hash(circle(radius=1.0)), hash(circle()))

    def test_different_types_are_not_equal(self):
        self.assertNotEqual(shape(name="a"), circle(name="a"))
        self.assertFalse(descriptions_equal(shape(name="a"), circle(name="a"), shape.all_members))

    def test_custom_comparer_and_hash_agree(self):
        a, b = circle(label="Hello"), circle(label="HELLO")
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))

    def test_nested_lists_compare_structurally(self):
        a = shape(parts=[circle(radius=2.0)], tags=["x", "y"])
        b = shape(parts=[circle(radius=2.0)], tags=["x", "y"])
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, shape(parts=[circle(radius=3.0)], tags=["x", "y"]))

    def test_unhashable_equal_values_hash_equal(self):
        a, b = swatch(color=Color("red")), swatch(color=Color("red"))
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, swatch(color=Color("blue")))

    def test_dict_and_set_values_hash_regardless_of_order(self):
        a = swatch(meta={"x": 1, "y": [1, 2], "z": {3, 4}})
        b = swatch(meta={"z": {4, 3}, "y": [1, 2], "x": 1})
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))

    def test_usable_as_memo_key(self):
        cache = {circle(radius=2.0): "cached"}
        self.assertEqual(cache[circle(radius=2.0)], "cached")

    def test_hash_folds_in_declaration_order_seeded_by_base(self):
        d = circle(name="n", radius=2.0)
        base_hash = fold(HASH_SEED, [hash("n"), 0, 0])  # name, tags and parts unset
        expected = fold(base_hash, [hash(2.0), 0])             # radius, label (custom comparer)
        # hash() reduces the returned int the same way it reduces any int
        self.assertEqual(hash(d), hash(expected))

    def test_description_hash_without_base(self):
        d = shape(name="n")
        self.assertEqual(description_hash(d, shape.own_members), fold(HASH_SEED, [hash("n"), 0, 0]))

    def test_with_attribute_keeps_structural_type(self):
        d = circle(radius=2.0).with_attribute("radius", 3.0)
        self.assertIsInstance(d, StructuralElement)
        self.assertEqual(d, circle(radius=3.0))

    def test_reconciler_still_uses_identity(self):
        d1 = shape(parts=[circle(radius=2.0)])
        root = d1.materialize()
        live = root.parts[0]
        live.radius = 99.0
        # Structurally equal but a different object: patched in place, nothing written.
        shape(parts=[circle(radius=2.0)]).apply_incremental_to(d1, root)
        self.assertIs(root.parts[0], live)
        self.assertEqual(live.radius, 99.0)


if __name__ == "__main__":
    unittest.main()
