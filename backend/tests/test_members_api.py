import unittest

from support import ApiTestCase


class TestMembersApi(ApiTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        self.owner_id, self.owner = await self.register("owner")
        self.member_id, self.member = await self.register("member")
        _, self.outsider = await self.register("outsider")
        self.board = await self.create_board(self.owner, "Team")

    async def test_invite_twice_conflicts(self) -> None:
        first = await self.invite(self.owner, self.board["id"], "member")
        self.assertEqual(first.status_code, 201)
        second = await self.invite(self.owner, self.board["id"], "member")
        self.assertEqual(second.status_code, 409)

    async def test_owner_self_invite_is_bad_request(self) -> None:
        resp = await self.invite(self.owner, self.board["id"], "owner")
        self.assertEqual(resp.status_code, 400)

    async def test_invite_unknown_email(self) -> None:
        resp = await self.invite(self.owner, self.board["id"], "nobody")
        self.assertEqual(resp.status_code, 404)

    async def test_invite_matches_email_case_insensitively(self) -> None:
        resp = await self.client.post(
            "/api/auth/register",
            json={"username": "carol", "email": "Carol@example.com", "password": "secret123"},
        )
        self.assertEqual(resp.status_code, 201)
        carol_id = resp.json()["user"]["id"]

        resp = await self.client.post(
            "/api/members/invite",
            json={"board_id": self.board["id"], "email": "CAROL@example.com"},
            headers=self.owner,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["user_id"], carol_id)

    async def test_only_owner_invites(self) -> None:
        await self.invite(self.owner, self.board["id"], "member")
        self.assertEqual((await self.invite(self.member, self.board["id"], "outsider")).status_code, 403)
        self.assertEqual((await self.invite(self.outsider, self.board["id"], "outsider")).status_code, 404)

    async def test_invite_grants_access_and_notifies(self) -> None:
        url = f"/api/boards/{self.board['id']}"
        self.assertEqual((await self.client.get(url, headers=self.member)).status_code, 404)
        await self.invite(self.owner, self.board["id"], "member")
        self.assertEqual((await self.client.get(url, headers=self.member)).status_code, 200)

        page = (await self.client.get("/api/notifications", headers=self.member)).json()
        self.assertEqual(page["notifications"][0]["type"], "BOARD_INVITATION")
        self.assertEqual(page["notifications"][0]["message"], 'You have been invited to join the board "Team"')
        self.assertEqual(page["notifications"][0]["data"]["board_id"], self.board["id"])

    async def test_member_list_starts_with_owner(self) -> None:
        await self.invite(self.owner, self.board["id"], "member")
        members = (await self.client.get(f"/api/members/board/{self.board['id']}", headers=self.member)).json()
        self.assertEqual(members[0]["id"], 0)
        self.assertTrue(members[0]["is_owner"])
        self.assertEqual(members[0]["user_id"], self.owner_id)
        self.assertEqual([m["user_id"] for m in members[1:]], [self.member_id])

    async def test_remove_member(self) -> None:
        member_row = (await self.invite(self.owner, self.board["id"], "member")).json()
        url = f"/api/members/{member_row['id']}"

        self.assertEqual((await self.client.delete(url, headers=self.member)).status_code, 403)
        self.assertEqual((await self.client.delete(url, headers=self.owner)).status_code, 200)
        self.assertEqual((await self.client.get(f"/api/boards/{self.board['id']}", headers=self.member)).status_code, 404)

        page = (await self.client.get("/api/notifications", headers=self.member)).json()
        self.assertEqual(page["notifications"][0]["type"], "BOARD_REMOVAL")

    async def test_leave_board(self) -> None:
        await self.invite(self.owner, self.board["id"], "member")
        url = f"/api/members/board/{self.board['id']}/leave"

        self.assertEqual((await self.client.delete(url, headers=self.owner)).status_code, 400)
        self.assertEqual((await self.client.delete(url, headers=self.member)).status_code, 200)
        self.assertEqual((await self.client.delete(url, headers=self.member)).status_code, 404)

    async def test_search_users(self) -> None:
        resp = await self.client.get("/api/members/search", params={"query": "MEM"}, headers=self.owner)
        self.assertEqual([u["username"] for u in resp.json()["users"]], ["member"])

        resp = await self.client.get("/api/members/search", params={"query": "owner"}, headers=self.owner)
        self.assertEqual(resp.json()["users"], [])

        resp = await self.client.get("/api/members/search", params={"query": " "}, headers=self.owner)
        self.assertEqual(resp.status_code, 400)


if __name__ == "__main__":
    unittest.main()
