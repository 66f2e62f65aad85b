import unittest

from support import ApiTestCase


class TestBoardsApi(ApiTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        self.owner_id, self.owner = await self.register("owner")
        self.member_id, self.member = await self.register("member")
        _, self.outsider = await self.register("outsider")
        self.board = await self.create_board(self.owner, "Roadmap")
        resp = await self.invite(self.owner, self.board["id"], "member")
        self.assertEqual(resp.status_code, 201)

    async def test_board_list_contains_owned_and_shared(self) -> None:
        other = await self.create_board(self.member, "Personal")

        owner_boards = (await self.client.get("/api/boards", headers=self.owner)).json()
        member_boards = (await self.client.get("/api/boards", headers=self.member)).json()
        outsider_boards = (await self.client.get("/api/boards", headers=self.outsider)).json()

        self.assertEqual([b["id"] for b in owner_boards], [self.board["id"]])
        self.assertEqual({b["id"] for b in member_boards}, {self.board["id"], other["id"]})
        self.assertEqual(outsider_boards, [])

    async def test_board_detail_is_nested(self) -> None:
        todo = await self.create_column(self.owner, self.board["id"], "Todo")
        await self.create_task(self.member, todo["id"], "First")

        resp = await self.client.get(f"/api/boards/{self.board['id']}", headers=self.member)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["owner"]["id"], self.owner_id)
        self.assertEqual([m["user_id"] for m in body["members"]], [self.member_id])
        self.assertEqual(body["columns"][0]["tasks"][0]["title"], "First")

    async def test_owner_only_actions(self) -> None:
        url = f"/api/boards/{self.board['id']}"
        self.assertEqual((await self.client.put(url, json={"name": "x"}, headers=self.member)).status_code, 403)
        self.assertEqual((await self.client.put(url, json={"name": "x"}, headers=self.outsider)).status_code, 404)
        self.assertEqual((await self.client.delete(url, headers=self.member)).status_code, 403)

        resp = await self.client.put(url, json={"name": "Renamed"}, headers=self.owner)
        self.assertEqual(resp.json()["name"], "Renamed")

    async def test_outsider_cannot_see_children(self) -> None:
        todo = await self.create_column(self.owner, self.board["id"], "Todo")
        task = await self.create_task(self.owner, todo["id"], "Hidden")

        self.assertEqual((await self.client.get(f"/api/columns/{todo['id']}", headers=self.outsider)).status_code, 404)
        self.assertEqual((await self.client.get(f"/api/tasks/{task['id']}", headers=self.outsider)).status_code, 404)
        resp = await self.client.post("/api/tasks", json={"column_id": todo["id"], "title": "x"}, headers=self.outsider)
        self.assertEqual(resp.status_code, 404)

    async def test_delete_board_cascades(self) -> None:
        todo = await self.create_column(self.owner, self.board["id"], "Todo")
        task = await self.create_task(self.owner, todo["id"], "Doomed")

        resp = await self.client.delete(f"/api/boards/{self.board['id']}", headers=self.owner)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual((await self.client.get(f"/api/tasks/{task['id']}", headers=self.owner)).status_code, 404)
        self.assertEqual((await self.client.get(f"/api/columns/{todo['id']}", headers=self.owner)).status_code, 404)


class TestColumnsAndTasksApi(ApiTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        _, self.owner = await self.register("owner")
        self.board = await self.create_board(self.owner)
        self.todo = await self.create_column(self.owner, self.board["id"], "Todo")
        self.done = await self.create_column(self.owner, self.board["id"], "Done")

    async def test_columns_append_and_reorder(self) -> None:
        self.assertEqual((self.todo["position"], self.done["position"]), (1, 2))

        resp = await self.client.put(
            f"/api/columns/reorder/{self.board['id']}",
            json={"column_ids": [self.done["id"], self.todo["id"]]},
            headers=self.owner,
        )
        self.assertEqual(resp.status_code, 200)

        columns = (await self.client.get(f"/api/columns/board/{self.board['id']}", headers=self.owner)).json()
        self.assertEqual([c["name"] for c in columns], ["Done", "Todo"])

    async def test_task_create_update_and_explicit_position(self) -> None:
        first = await self.create_task(self.owner, self.todo["id"], "One")
        second = await self.create_task(self.owner, self.todo["id"], "Two")
        self.assertEqual((first["position"], second["position"]), (1, 2))

        resp = await self.client.post(
            "/api/tasks", json={"column_id": self.todo["id"], "title": "Pinned", "position": 7}, headers=self.owner
        )
        self.assertEqual(resp.json()["position"], 7)

        resp = await self.client.put(
            f"/api/tasks/{first['id']}", json={"title": "One!", "description": "details"}, headers=self.owner
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["title"], "One!")
        self.assertEqual(resp.json()["description"], "details")
        self.assertEqual(resp.json()["position"], 1)

    async def test_move_task_to_top_of_destination(self) -> None:
        moving = await self.create_task(self.owner, self.todo["id"], "Moving")
        staying = await self.create_task(self.owner, self.done["id"], "Staying")

        resp = await self.client.put(
            f"/api/tasks/{moving['id']}/move",
            json={"column_id": self.done["id"], "position": 5},
            headers=self.owner,
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual((resp.json()["column_id"], resp.json()["position"]), (self.done["id"], 1))

        tasks = (await self.client.get(f"/api/tasks/column/{self.done['id']}", headers=self.owner)).json()
        self.assertEqual([(t["id"], t["position"]) for t in tasks], [(moving["id"], 1), (staying["id"], 2)])

    async def test_move_requires_accessible_destination(self) -> None:
        _, stranger = await self.register("stranger")
        foreign_board = await self.create_board(stranger, "Theirs")
        foreign_column = await self.create_column(stranger, foreign_board["id"], "Todo")
        task = await self.create_task(self.owner, self.todo["id"], "Mine")

        resp = await self.client.put(
            f"/api/tasks/{task['id']}/move",
            json={"column_id": foreign_column["id"], "position": 1},
            headers=self.owner,
        )
        self.assertEqual(resp.status_code, 404)

    async def test_reorder_tasks(self) -> None:
        a = await self.create_task(self.owner, self.todo["id"], "a")
        b = await self.create_task(self.owner, self.todo["id"], "b")
        c = await self.create_task(self.owner, self.todo["id"], "c")

        resp = await self.client.put(
            f"/api/tasks/reorder/{self.todo['id']}", json={"task_ids": [c["id"], a["id"], b["id"]]}, headers=self.owner
        )
        self.assertEqual(resp.status_code, 200)
        tasks = (await self.client.get(f"/api/tasks/column/{self.todo['id']}", headers=self.owner)).json()
        self.assertEqual([t["title"] for t in tasks], ["c", "a", "b"])

    async def test_delete_column_removes_tasks(self) -> None:
        task = await self.create_task(self.owner, self.todo["id"], "Gone")
        resp = await self.client.delete(f"/api/columns/{self.todo['id']}", headers=self.owner)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual((await self.client.get(f"/api/tasks/{task['id']}", headers=self.owner)).status_code, 404)


if __name__ == "__main__":
    unittest.main()
