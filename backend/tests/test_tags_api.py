import unittest

from support import ApiTestCase


class TestTagsApi(ApiTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        _, self.owner = await self.register("owner")
        _, self.outsider = await self.register("outsider")
        self.board = await self.create_board(self.owner)
        column = await self.create_column(self.owner, self.board["id"], "Todo")
        self.task = await self.create_task(self.owner, column["id"], "Tagged")

    async def _create_tag(self, name: str, **extra):
        return await self.client.post(
            "/api/tags", json={"board_id": self.board["id"], "name": name, **extra}, headers=self.owner
        )

    async def test_create_defaults_color_and_rejects_duplicates(self) -> None:
        resp = await self._create_tag("bug")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["color"], "#3B82F6")
        self.assertEqual((await self._create_tag("bug")).status_code, 409)
        self.assertEqual((await self._create_tag("ui", color="red")).status_code, 400)

    async def test_list_search_and_update(self) -> None:
        bug = (await self._create_tag("bug")).json()
        await self._create_tag("feature", color="#00FF00")

        tags = (await self.client.get("/api/tags", params={"search": "FEAT"}, headers=self.owner)).json()
        self.assertEqual([t["name"] for t in tags], ["feature"])
        board_tags = (await self.client.get(f"/api/tags/board/{self.board['id']}", headers=self.owner)).json()
        self.assertEqual([t["name"] for t in board_tags], ["bug", "feature"])
        self.assertEqual((await self.client.get("/api/tags", headers=self.outsider)).json(), [])

        conflict = await self.client.put(f"/api/tags/{bug['id']}", json={"name": "feature"}, headers=self.owner)
        self.assertEqual(conflict.status_code, 409)
        resp = await self.client.put(f"/api/tags/{bug['id']}", json={"name": "defect"}, headers=self.owner)
        self.assertEqual((resp.json()["name"], resp.json()["color"]), ("defect", "#3B82F6"))

    async def test_task_tags(self) -> None:
        tag = (await self._create_tag("bug")).json()
        payload = {"task_id": self.task["id"], "tag_id": tag["id"]}

        resp = await self.client.post("/api/task-tags/add", json=payload, headers=self.owner)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["tag"]["name"], "bug")
        self.assertEqual((await self.client.post("/api/task-tags/add", json=payload, headers=self.owner)).status_code, 409)

        tasks = (await self.client.get(f"/api/task-tags/tag/{tag['id']}/tasks", headers=self.owner)).json()
        self.assertEqual([t["id"] for t in tasks], [self.task["id"]])

        url = f"/api/task-tags/task/{self.task['id']}/tag/{tag['id']}"
        self.assertEqual((await self.client.delete(url, headers=self.owner)).status_code, 200)
        self.assertEqual((await self.client.delete(url, headers=self.owner)).status_code, 404)

    async def test_deleting_tag_removes_task_tags(self) -> None:
        tag = (await self._create_tag("bug")).json()
        await self.client.post(
            "/api/task-tags/add", json={"task_id": self.task["id"], "tag_id": tag["id"]}, headers=self.owner
        )

        resp = await self.client.delete(f"/api/tags/{tag['id']}", headers=self.owner)
        self.assertEqual(resp.status_code, 200)

        task_tags = (await self.client.get(f"/api/task-tags/task/{self.task['id']}", headers=self.owner)).json()
        self.assertEqual(task_tags, [])


if __name__ == "__main__":
    unittest.main()
