import unittest
from mealboard.domain.RecipeStore import RecipeStore
from mealboard.events.Event_Bus import EventBus, RECIPES_CHANGED


class TestRecipeStore(unittest.TestCase):

    def setUp(self):
        self.bus = EventBus()
        self.events = []
        self.bus.subscribe(RECIPES_CHANGED, lambda name, payload: self.events.append(payload))
        self.store = RecipeStore(event_bus=self.bus)

    def test_add_generates_fresh_id(self):
        a = self.store.add({"name": "Soup", "ingredients": [], "id": "caller-id"})
        b = self.store.add({"name": "Soup", "ingredients": []})
        self.assertNotEqual(a.id, "caller-id")
        self.assertNotEqual(a.id, b.id)
        self.assertEqual(self.events[0], {"action": "add", "id": a.id})

    def test_list_keeps_insertion_order(self):
        names = ["Salad", "Curry", "Apple Pie"]
        for n in names:
            self.store.add({"name": n})
        self.assertEqual([r.name for r in self.store.list()], names)

    def test_update_merges_fields(self):
        r = self.store.add({"name": "Soup", "calories": 200})
        self.store.update(r.id, {"calories": 250, "tags": ["lunch"]})
        updated = self.store.get(r.id)
        self.assertEqual(updated.calories, 250)
        self.assertEqual(updated.tags, ["lunch"])
        self.assertEqual(updated.name, "Soup")

    def test_update_unknown_id_is_noop(self):
        self.store.add({"name": "Soup"})
        before = self.store.to_dict()
        self.events.clear()
        self.store.update("missing", {"name": "Other"})
        self.assertEqual(self.store.to_dict(), before)
        self.assertEqual(self.events, [])

    def test_delete(self):
        a = self.store.add({"name": "Soup"})
        b = self.store.add({"name": "Bread"})
        self.store.delete(a.id)
        self.assertEqual([r.id for r in self.store.list()], [b.id])
        self.store.delete("missing")
        self.assertEqual(len(self.store), 1)

    def test_tags_are_sorted_and_unique(self):
        self.store.add({"name": "A", "tags": ["vegan", "dinner"]})
        self.store.add({"name": "B", "tags": ["dinner", "quick"]})
        self.assertEqual(self.store.tags(), ["dinner", "quick", "vegan"])
