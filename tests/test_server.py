"""
Task List Test Suite — HTTP Routes
===================================
Drives the FastAPI app through TestClient; no network involved.

Usage:
    python -m pytest tests/test_server.py -v
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from tasklist.server import create_app, WELCOME_BANNER, ROUTES
from tasklist.store import TaskStore


class ServerTestCase(unittest.TestCase):

    def setUp(self):
        self.store = TaskStore()
        self.app = create_app(self.store)
        self.client = TestClient(self.app)

    def tearDown(self):
        self.store.clear()

    def create(self, **body):
        resp = self.client.post("/tasks", json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()


# ─────────────────────────────────────────────
#  App wiring
# ─────────────────────────────────────────────

class TestAppSetup(ServerTestCase):

    def test_injected_store(self):
        self.assertIs(self.app.state.store, self.store)

    def test_default_store_per_app(self):
        a, b = create_app(), create_app()
        self.assertIsNot(a.state.store, b.state.store)

    def test_welcome_banner(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, WELCOME_BANNER)
        self.assertTrue(resp.headers["content-type"].startswith("text/plain"))

    def test_route_table_covers_app(self):
        self.assertEqual(len(ROUTES), 6)


# ─────────────────────────────────────────────
#  GET /tasks
# ─────────────────────────────────────────────

class TestListTasks(ServerTestCase):

    def test_empty(self):
        resp = self.client.get("/tasks")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_order_and_filter(self):
        first = self.create(title="a")
        self.create(title="b")
        self.client.put(f"/tasks/{first['id']}", json={"completed": True})

        all_titles = [t["title"] for t in self.client.get("/tasks").json()]
        done = self.client.get("/tasks", params={"status": "done"}).json()
        active = self.client.get("/tasks", params={"status": "active"}).json()

        self.assertEqual(all_titles, ["a", "b"])
        self.assertEqual([t["title"] for t in done], ["a"])
        self.assertEqual([t["title"] for t in active], ["b"])

    def test_bad_filter(self):
        resp = self.client.get("/tasks", params={"status": "later"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("status", resp.json()["detail"])


# ─────────────────────────────────────────────
#  GET /tasks/{id}
# ─────────────────────────────────────────────

class TestGetTask(ServerTestCase):

    def test_found(self):
        task = self.create(title="Buy milk")
        resp = self.client.get(f"/tasks/{task['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), task)

    def test_missing(self):
        resp = self.client.get("/tasks/999")
        self.assertEqual(resp.status_code, 404)
        self.assertIn("detail", resp.json())

    def test_non_numeric_id(self):
        self.assertEqual(self.client.get("/tasks/abc").status_code, 404)


# ─────────────────────────────────────────────
#  POST /tasks
# ─────────────────────────────────────────────

class TestCreateTask(ServerTestCase):

    def test_created(self):
        task = self.create(title="Buy milk")
        self.assertEqual(task["title"], "Buy milk")
        self.assertFalse(task["completed"])
        self.assertIn("createdAt", task)
        self.assertNotIn("updatedAt", task)
        self.assertIsInstance(task["id"], int)

    def test_supplied_id(self):
        task = self.create(title="a", id=77)
        self.assertEqual(task["id"], 77)

    def test_missing_title(self):
        resp = self.client.post("/tasks", json={})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "title is required")

    def test_empty_title(self):
        self.assertEqual(self.client.post("/tasks", json={"title": ""}).status_code, 400)

    def test_body_not_an_object(self):
        resp = self.client.post("/tasks", json=["Buy milk"])
        self.assertEqual(resp.status_code, 400)

    def test_no_body(self):
        self.assertEqual(self.client.post("/tasks").status_code, 400)

    def test_duplicate_id(self):
        self.create(title="a", id=5)
        resp = self.client.post("/tasks", json={"title": "b", "id": 5})
        self.assertEqual(resp.status_code, 400)

    def test_string_id_rejected(self):
        resp = self.client.post("/tasks", json={"title": "a", "id": "7"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get("/tasks").json(), [])

    def test_non_string_title_rejected(self):
        self.assertEqual(self.client.post("/tasks", json={"title": 5}).status_code, 400)


# ─────────────────────────────────────────────
#  PUT /tasks/{id}
# ─────────────────────────────────────────────

class TestUpdateTask(ServerTestCase):

    def test_update(self):
        task = self.create(title="Buy milk")
        resp = self.client.put(f"/tasks/{task['id']}", json={"completed": True})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["completed"])
        self.assertEqual(body["title"], "Buy milk")
        self.assertIn("updatedAt", body)

    def test_protected_fields_ignored(self):
        task = self.create(title="a")
        resp = self.client.put(f"/tasks/{task['id']}", json={
            "id": 999, "createdAt": "then", "title": "b",
        })
        body = resp.json()
        self.assertEqual(body["id"], task["id"])
        self.assertEqual(body["createdAt"], task["createdAt"])
        self.assertEqual(body["title"], "b")

    def test_missing(self):
        resp = self.client.put("/tasks/999", json={"title": "x"})
        self.assertEqual(resp.status_code, 404)

    def test_non_numeric_id(self):
        self.assertEqual(self.client.put("/tasks/abc", json={"title": "x"}).status_code, 404)

    def test_invalid_patch(self):
        task = self.create(title="a")
        resp = self.client.put(f"/tasks/{task['id']}", json={"title": ""})
        self.assertEqual(resp.status_code, 400)

    def test_string_completed_rejected(self):
        task = self.create(title="a")
        resp = self.client.put(f"/tasks/{task['id']}", json={"completed": "yes"})
        self.assertEqual(resp.status_code, 400)
        stored = self.client.get(f"/tasks/{task['id']}").json()
        self.assertFalse(stored["completed"])
        self.assertNotIn("updatedAt", stored)

    def test_missing_wins_over_bad_patch(self):
        resp = self.client.put("/tasks/999", json={"completed": "maybe"})
        self.assertEqual(resp.status_code, 404)

    def test_patch_not_an_object(self):
        task = self.create(title="a")
        resp = self.client.put(f"/tasks/{task['id']}", json=["done"])
        self.assertEqual(resp.status_code, 400)


# ─────────────────────────────────────────────
#  DELETE /tasks/{id}
# ─────────────────────────────────────────────

class TestDeleteTask(ServerTestCase):

    def test_delete(self):
        task = self.create(title="a")
        resp = self.client.delete(f"/tasks/{task['id']}")
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(resp.content, b"")
        self.assertEqual(self.client.get(f"/tasks/{task['id']}").status_code, 404)

    def test_missing(self):
        self.assertEqual(self.client.delete("/tasks/1").status_code, 404)


# ─────────────────────────────────────────────
#  Full lifecycle
# ─────────────────────────────────────────────

class TestLifecycle(ServerTestCase):

    def test_buy_milk(self):
        task = self.create(title="Buy milk")
        updated = self.client.put(f"/tasks/{task['id']}", json={"completed": True}).json()
        self.assertTrue(updated["completed"])
        self.assertIn("updatedAt", updated)

        self.assertEqual(self.client.delete(f"/tasks/{task['id']}").status_code, 204)
        ids = [t["id"] for t in self.client.get("/tasks").json()]
        self.assertNotIn(task["id"], ids)


if __name__ == "__main__":
    unittest.main()
