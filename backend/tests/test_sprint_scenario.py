import unittest

from support import ApiTestCase


class TestSprintScenario(ApiTestCase):
    async def test_board_lifecycle(self) -> None:
        u1_id, u1 = await self.register("uone")
        u2_id, u2 = await self.register("utwo")

        board = await self.create_board(u1, "Sprint 1")
        self.assertEqual(board["owner_id"], u1_id)

        columns = [await self.create_column(u1, board["id"], name) for name in ("Todo", "Doing", "Done")]
        self.assertEqual([c["position"] for c in columns], [1, 2, 3])

        task = await self.create_task(u1, columns[0]["id"], "Write spec")
        self.assertEqual(task["position"], 1)

        self.assertEqual((await self.invite(u1, board["id"], "utwo")).status_code, 201)
        self.assertEqual((await self.client.get(f"/api/boards/{board['id']}", headers=u2)).status_code, 200)

        assignment = (
            await self.client.post(f"/api/task-assignments/{task['id']}/assign/{u2_id}", headers=u1)
        ).json()
        self.assertEqual(assignment["status"], "PENDING")
        u2_types = [n["type"] for n in (await self.client.get("/api/notifications", headers=u2)).json()["notifications"]]
        self.assertIn("TASK_ASSIGNMENT", u2_types)

        resp = await self.client.put(f"/api/task-assignments/{assignment['id']}/accept", headers=u2)
        self.assertEqual(resp.json()["status"], "ACCEPTED")

        u1_types = [n["type"] for n in (await self.client.get("/api/notifications", headers=u1)).json()["notifications"]]
        self.assertEqual(u1_types, ["TASK_ASSIGNMENT_ACCEPTED"])
        u2_types = [n["type"] for n in (await self.client.get("/api/notifications", headers=u2)).json()["notifications"]]
        self.assertEqual(u2_types, ["BOARD_INVITATION"])

        detail = (await self.client.get(f"/api/tasks/{task['id']}", headers=u2)).json()
        self.assertEqual([(m["user_id"], m["status"]) for m in detail["members"]], [(u2_id, "ACCEPTED")])


if __name__ == "__main__":
    unittest.main()
