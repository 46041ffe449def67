import io
import tempfile
import unittest
import zipfile
from fastapi.testclient import TestClient
from mealboard.api.api_run import app
from mealboard.api.dependencies import get_registry
from mealboard.infra.session import SessionRegistry
from mealboard.infra.storage import JsonPlannerStorage

USER = {"X-User-Id": "tester"}


class TestMealBoardAPI(unittest.TestCase):

    def setUp(self):
        # Use a temporary data directory (don't alter the real one)
        self._tmp = tempfile.TemporaryDirectory()
        registry = SessionRegistry(JsonPlannerStorage(self._tmp.name))

        async def _registry():
            return registry

        app.dependency_overrides[get_registry] = _registry
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self._tmp.cleanup()

    def _add_recipe(self, name, ingredients=(), **extra):
        resp = self.client.post('/api/recipes', headers=USER, json={
            "name": name,
            "ingredients": [{"name": n, "amount": a, "unit": u} for n, a, u in ingredients],
            **extra,
        })
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["recipe"]

    def test_recipe_crud(self):
        soup = self._add_recipe("Tomato Soup", [("Tomato", 300, "g")], calories=200, tags=["lunch"])
        self.assertTrue(soup["id"])
        resp = self.client.patch(f'/api/recipes/{soup["id"]}', headers=USER, json={"calories": 220})
        self.assertEqual(resp.json()["recipe"]["calories"], 220)
        self.assertEqual(resp.json()["recipe"]["ingredients"][0]["name"], "Tomato")
        self.assertEqual(self.client.get('/api/recipes/tags', headers=USER).json(), {"tags": ["lunch"]})
        resp = self.client.delete(f'/api/recipes/{soup["id"]}', headers=USER)
        self.assertEqual(resp.json()["count"], 0)

    def test_blank_recipe_name_rejected(self):
        resp = self.client.post('/api/recipes', headers=USER, json={"name": "   "})
        self.assertEqual(resp.status_code, 422)

    def test_unknown_ids_are_noops(self):
        self.assertEqual(self.client.patch('/api/recipes/nope', headers=USER, json={"name": "X"}).status_code, 200)
        self.assertEqual(self.client.delete('/api/plan/nope', headers=USER).json()["count"], 0)
        resp = self.client.put('/api/plan/nope/move', headers=USER, json={"date": "Monday", "meal_type": "lunch"})
        self.assertEqual(resp.json(), {"count": 0, "entries": []})
        self.assertEqual(self.client.get('/api/recipes/nope', headers=USER).status_code, 404)

    def test_drag_flow_and_derived_views(self):
        salad = self._add_recipe("Salad", [("Lettuce", 100, "g"), ("lettuce", 50, "G")],
                                 calories=150, macros={"protein": 3, "carbs": 10, "fats": 8})

        self.assertTrue(self.client.post('/api/planner/drag/start', headers=USER,
                                         json={"recipe_id": salad["id"]}).json()["started"])
        resp = self.client.post('/api/planner/drag/end', headers=USER, json={"targets": [
            {"id": "trash"},
            {"id": "Monday-lunch", "date": "Monday", "meal_type": "lunch"},
        ]})
        body = resp.json()
        self.assertEqual(body["outcome"]["kind"], "inserted")
        self.assertEqual(body["state"], "idle")
        entry_id = body["outcome"]["entry_id"]
        self.assertNotEqual(entry_id, salad["id"])

        grocery = self.client.get('/api/grocery-list', headers=USER).json()
        self.assertEqual(grocery["items"], [{"name": "Lettuce", "amount": 150, "unit": "g", "recipes": ["Salad"]}])

        macros = self.client.get('/api/macros', headers=USER, params={"day": "Monday"}).json()
        self.assertEqual(macros["totals"], {"protein": 3, "carbs": 10, "fats": 8, "calories": 150})

        # move the placed card, then throw it away
        self.client.post('/api/planner/drag/start', headers=USER, json={"entry_id": entry_id})
        self.client.post('/api/planner/drag/over', headers=USER, json={"targets": [
            {"id": "Tuesday-dinner", "date": "Tuesday", "meal_type": "dinner"}]})
        moved = self.client.post('/api/planner/drag/end', headers=USER, json={"targets": [
            {"id": "Tuesday-dinner", "date": "Tuesday", "meal_type": "dinner"}]}).json()
        self.assertEqual(moved["entries"], [
            {"id": entry_id, "recipe_id": salad["id"], "date": "Tuesday", "meal_type": "dinner"}])

        self.client.post('/api/planner/drag/start', headers=USER, json={"entry_id": entry_id})
        removed = self.client.post('/api/planner/drag/end', headers=USER, json={"targets": [{"id": "trash"}]}).json()
        self.assertEqual(removed["outcome"]["kind"], "removed")
        self.assertEqual(removed["entries"], [])

    def test_library_recipe_on_trash_changes_nothing(self):
        salad = self._add_recipe("Salad")
        self.client.post('/api/planner/drag/start', headers=USER, json={"recipe_id": salad["id"]})
        body = self.client.post('/api/planner/drag/end', headers=USER, json={"targets": [{"id": "trash"}]}).json()
        self.assertEqual(body["outcome"]["kind"], "none")
        self.assertEqual(body["entries"], [])

    def test_deleted_recipe_hidden_from_views(self):
        stew = self._add_recipe("Stew", [("Beef", 500, "g")], calories=700)
        self.client.post('/api/plan', headers=USER, json={"recipe_id": stew["id"], "date": "Friday", "meal_type": "dinner"})
        self.client.delete(f'/api/recipes/{stew["id"]}', headers=USER)
        self.assertEqual(self.client.get('/api/plan', headers=USER).json()["count"], 1)
        self.assertEqual(self.client.get('/api/grocery-list', headers=USER).json()["count"], 0)
        self.assertEqual(self.client.get('/api/plan/slots', headers=USER).json()["grid"]["Friday"]["dinner"], [])
        self.assertEqual(self.client.get('/api/macros', headers=USER, params={"day": "Friday"}).json()["totals"]["calories"], 0)

    def test_data_survives_new_session(self):
        self._add_recipe("Pie", [("Apple", 3, "pcs")])
        self.assertTrue(self.client.post('/api/refresh', headers=USER).json()["reloaded"])
        self.assertEqual(self.client.get('/api/recipes', headers=USER).json()["count"], 1)
        # another user sees an empty library
        self.assertEqual(self.client.get('/api/recipes', headers={"X-User-Id": "other"}).json()["count"], 0)

    def test_exports(self):
        pie = self._add_recipe("Pie", [("Apple", 3, "pcs")])
        self.client.post('/api/plan', headers=USER, json={"recipe_id": pie["id"], "date": "Sunday", "meal_type": "dinner"})
        csv_resp = self.client.get('/api/grocery-list.csv', headers=USER)
        self.assertIn("Apple,3,pcs,Pie", csv_resp.text)
        self.assertIn("[ ] Apple - 3 pcs", self.client.get('/api/grocery-list.txt', headers=USER).text)
        pdf = self.client.get('/api/grocery-list.pdf', headers=USER)
        self.assertTrue(pdf.content.startswith(b"%PDF"))
        self.assertTrue(self.client.get('/api/plan.pdf', headers=USER).content.startswith(b"%PDF"))

    def test_export_import_round(self):
        self._add_recipe("Pie", [("Apple", 3, "pcs")])
        archive = self.client.get('/api/export', headers=USER).content
        resp = self.client.post('/api/import', headers={"X-User-Id": "copy"}, content=archive)
        self.assertEqual(resp.json(), {"recipes": 1, "entries": 0})
        bad = self.client.post('/api/import', headers=USER, content=b"not a zip")
        self.assertEqual(bad.status_code, 400)

    def test_events_feed(self):
        self._add_recipe("Pie")
        feed = self.client.get('/api/events', headers=USER).json()
        self.assertEqual(feed["events"][-1]["type"], "recipes.changed")
        later = self.client.get('/api/events', headers=USER, params={"since": feed["next_cursor"]}).json()
        self.assertEqual(later["events"], [])

    def test_null_recipe_name_rejected(self):
        soup = self._add_recipe("Soup", [("Leek", 2, "pcs")])
        resp = self.client.patch(f'/api/recipes/{soup["id"]}', headers=USER, json={"name": None})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.client.get(f'/api/recipes/{soup["id"]}', headers=USER).json()["recipe"]["name"], "Soup")
        self.client.post('/api/plan', headers=USER, json={"recipe_id": soup["id"], "date": "Monday", "meal_type": "lunch"})
        self.assertEqual(self.client.get('/api/plan.pdf', headers=USER).status_code, 200)

    def test_duplicate_entry_id_rejected(self):
        pie = self._add_recipe("Pie")
        first = self.client.post('/api/plan', headers=USER, json={
            "id": "X", "recipe_id": pie["id"], "date": "Monday", "meal_type": "lunch"})
        self.assertEqual(first.status_code, 201)
        second = self.client.post('/api/plan', headers=USER, json={
            "id": "X", "recipe_id": pie["id"], "date": "Tuesday", "meal_type": "dinner"})
        self.assertEqual(second.status_code, 409)
        entries = self.client.get('/api/plan', headers=USER).json()["entries"]
        self.assertEqual([(e["id"], e["date"]) for e in entries], [("X", "Monday")])

    def test_malformed_archive_is_bad_request(self):
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zipf:
            zipf.writestr("recipes.json", '["oops"]')
            zipf.writestr("plan.json", "[]")
        resp = self.client.post('/api/import', headers=USER, content=buf.getvalue())
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"]["operation"], "import")
