"""API tests for /api/posts: public reads, ownership rules, views, pagination."""

import math
import unittest

from tests.support import ApiTestCase


class TestCreatePost(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.register("alice")

    def test_create_sets_author_and_defaults(self) -> None:
        post = self.create_post(self.alice["token"], title="My First Post", content="Hello there, world")
        self.assertEqual(post["author"], self.alice["user"]["id"])
        self.assertEqual(post["slug"], "my-first-post")
        self.assertFalse(post["published"])
        self.assertEqual(post["views"], 0)
        self.assertIsNone(post["category"])
        self.assertIn("createdAt", post)
        self.assertIn("updatedAt", post)

    def test_requires_authentication(self) -> None:
        resp = self.client.post("/api/posts", json={"title": "Title", "content": "Long enough body"})
        self.assertEqual(resp.status_code, 401)

    def test_missing_fields(self) -> None:
        resp = self.client.post(
            "/api/posts", json={"title": "Only a title"}, headers=self.auth(self.alice["token"])
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Missing required fields: content")

    def test_inputs_are_sanitized(self) -> None:
        post = self.create_post(
            self.alice["token"],
            title="  <b>Bold</b> title  ",
            content="<script>alert('xss')</script>",
        )
        self.assertEqual(post["title"], "bBold/b title")
        self.assertEqual(post["content"], "scriptalert('xss')/script")

    def test_author_in_body_is_ignored(self) -> None:
        post = self.create_post(self.alice["token"], author=999)
        self.assertEqual(post["author"], self.alice["user"]["id"])

    def test_length_rules(self) -> None:
        headers = self.auth(self.alice["token"])
        short_title = self.client.post("/api/posts", json={"title": "ab", "content": "x" * 20}, headers=headers)
        short_body = self.client.post("/api/posts", json={"title": "abc", "content": "x" * 9}, headers=headers)
        self.assertEqual(short_title.status_code, 400)
        self.assertEqual(short_body.status_code, 400)

    def test_duplicate_titles_get_distinct_slugs(self) -> None:
        first = self.create_post(self.alice["token"], title="Same Title")
        second = self.create_post(self.alice["token"], title="Same Title")
        self.assertEqual(first["slug"], "same-title")
        self.assertEqual(second["slug"], "same-title-2")

    def test_unknown_category(self) -> None:
        resp = self.client.post(
            "/api/posts",
            json={"title": "Title", "content": "Long enough body", "category": 42},
            headers=self.auth(self.alice["token"]),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Category not found")


class TestReadPost(ApiTestCase):
    def test_views_increment_per_read(self) -> None:
        alice = self.register("alice")
        post = self.create_post(alice["token"])
        for expected in (1, 2, 3):
            resp = self.client.get(f"/api/posts/{post['id']}")
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json()["views"], expected)

    def test_not_found(self) -> None:
        resp = self.client.get("/api/posts/12345")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Post not found"})

    def test_non_integer_id(self) -> None:
        resp = self.client.get("/api/posts/not-an-id")
        self.assertEqual(resp.status_code, 400)


class TestUpdatePost(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.register("alice")
        self.bob = self.register("bob")
        self.post = self.create_post(self.alice["token"], title="Original Title")

    def _put(self, token: str, body: dict, post_id: int | None = None):
        return self.client.put(
            f"/api/posts/{post_id or self.post['id']}", json=body, headers=self.auth(token)
        )

    def test_author_can_update(self) -> None:
        resp = self._put(self.alice["token"], {"title": "New <Title>", "published": True})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["title"], "New Title")
        self.assertTrue(body["published"])
        self.assertEqual(body["content"], self.post["content"])

    def test_slug_not_regenerated(self) -> None:
        resp = self._put(self.alice["token"], {"title": "Completely Different"})
        self.assertEqual(resp.json()["slug"], "original-title")

    def test_other_user_forbidden(self) -> None:
        resp = self._put(self.bob["token"], {"title": "Hijacked"})
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["error"], "You can only update your own posts")

    def test_admin_has_no_override_on_update(self) -> None:
        self.promote_to_admin(self.bob["user"]["id"])
        resp = self._put(self.bob["token"], {"title": "Admin edit"})
        self.assertEqual(resp.status_code, 403)

    def test_empty_title_is_ignored(self) -> None:
        resp = self._put(self.alice["token"], {"title": "", "content": "Fresh content body"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["title"], "Original Title")
        self.assertEqual(resp.json()["content"], "Fresh content body")

    def test_invalid_new_title(self) -> None:
        resp = self._put(self.alice["token"], {"title": "<>"})
        self.assertEqual(resp.status_code, 400)

    def test_category_can_be_set_and_cleared(self) -> None:
        self.promote_to_admin(self.bob["user"]["id"])
        category = self.client.post(
            "/api/categories", json={"name": "Tech"}, headers=self.auth(self.bob["token"])
        ).json()
        set_resp = self._put(self.alice["token"], {"category": category["id"]})
        self.assertEqual(set_resp.json()["category"], category["id"])
        clear_resp = self._put(self.alice["token"], {"category": None})
        self.assertIsNone(clear_resp.json()["category"])

    def test_not_found(self) -> None:
        resp = self._put(self.alice["token"], {"title": "Whatever"}, post_id=999)
        self.assertEqual(resp.status_code, 404)

    def test_requires_authentication(self) -> None:
        resp = self.client.put(f"/api/posts/{self.post['id']}", json={"title": "Nope"})
        self.assertEqual(resp.status_code, 401)


class TestDeletePost(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.register("alice")
        self.bob = self.register("bob")
        self.post = self.create_post(self.alice["token"])

    def _delete(self, token: str):
        return self.client.delete(f"/api/posts/{self.post['id']}", headers=self.auth(token))

    def test_author_can_delete(self) -> None:
        resp = self._delete(self.alice["token"])
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Post deleted successfully"})
        self.assertEqual(self.client.get(f"/api/posts/{self.post['id']}").status_code, 404)

    def test_other_user_forbidden(self) -> None:
        resp = self._delete(self.bob["token"])
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["error"], "You can only delete your own posts")

    def test_admin_can_delete(self) -> None:
        self.promote_to_admin(self.bob["user"]["id"])
        self.assertEqual(self._delete(self.bob["token"]).status_code, 200)

    def test_not_found(self) -> None:
        self._delete(self.alice["token"])
        self.assertEqual(self._delete(self.alice["token"]).status_code, 404)


class TestListPosts(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.register("alice")

    def test_empty(self) -> None:
        resp = self.client.get("/api/posts")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"posts": [], "pagination": {"page": 1, "limit": 10, "total": 0, "pages": 0}},
        )

    def test_pagination(self) -> None:
        n = 23
        for i in range(n):
            self.create_post(self.alice["token"], title=f"Post number {i}")
        first = self.client.get("/api/posts", params={"limit": 10}).json()
        self.assertEqual(first["pagination"]["total"], n)
        self.assertEqual(first["pagination"]["pages"], math.ceil(n / 10))
        self.assertEqual(len(first["posts"]), 10)
        self.assertEqual(first["posts"][0]["title"], "Post number 22")

        last = self.client.get("/api/posts", params={"page": 3, "limit": 10}).json()
        self.assertEqual(len(last["posts"]), 3)
        self.assertEqual(last["posts"][-1]["title"], "Post number 0")

        beyond = self.client.get("/api/posts", params={"page": 9, "limit": 10}).json()
        self.assertEqual(beyond["posts"], [])
        self.assertEqual(beyond["pagination"]["total"], n)

    def test_published_filter(self) -> None:
        post = self.create_post(self.alice["token"], title="Will publish")
        self.create_post(self.alice["token"], title="Stays draft")
        self.client.put(
            f"/api/posts/{post['id']}", json={"published": True}, headers=self.auth(self.alice["token"])
        )
        published = self.client.get("/api/posts", params={"published": "true"}).json()
        drafts = self.client.get("/api/posts", params={"published": "false"}).json()
        self.assertEqual([p["title"] for p in published["posts"]], ["Will publish"])
        self.assertEqual([p["title"] for p in drafts["posts"]], ["Stays draft"])

    def test_category_filter(self) -> None:
        admin = self.register("root")
        self.promote_to_admin(admin["user"]["id"])
        cat = self.client.post(
            "/api/categories", json={"name": "News"}, headers=self.auth(admin["token"])
        ).json()
        self.create_post(self.alice["token"], title="In category", category=cat["id"])
        self.create_post(self.alice["token"], title="No category")
        resp = self.client.get("/api/posts", params={"category": cat["id"]}).json()
        self.assertEqual([p["title"] for p in resp["posts"]], ["In category"])
        self.assertEqual(resp["pagination"]["total"], 1)

    def test_limit_is_clamped_to_max(self) -> None:
        for i in range(3):
            self.create_post(self.alice["token"], title=f"Post number {i}")
        resp = self.client.get("/api/posts", params={"limit": 200})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["pagination"]["limit"], 100)
        self.assertEqual(body["pagination"]["pages"], 1)
        self.assertEqual(len(body["posts"]), 3)

    def test_page_and_limit_below_one_are_raised_to_one(self) -> None:
        self.create_post(self.alice["token"], title="Only post")
        resp = self.client.get("/api/posts", params={"page": 0, "limit": 0})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["pagination"]["page"], 1)
        self.assertEqual(body["pagination"]["limit"], 1)
        self.assertEqual(len(body["posts"]), 1)

    def test_non_integer_page_is_400(self) -> None:
        self.assertEqual(self.client.get("/api/posts", params={"page": "two"}).status_code, 400)


class TestScenario(ApiTestCase):
    """alice registers, logs in, posts; bob cannot edit; bob as admin can delete."""

    def test_end_to_end(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "alice@example.com", "password": "secret1"},
        )
        self.assertEqual(resp.status_code, 201)
        alice_id = resp.json()["user"]["id"]
        self.assertTrue(resp.json()["token"])

        resp = self.client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "secret1"}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["id"], alice_id)
        token = resp.json()["token"]

        profile = self.client.get("/api/auth/profile", headers=self.auth(token))
        self.assertEqual(profile.status_code, 200)
        self.assertEqual(profile.json()["username"], "alice")
        self.assertNotIn("password", profile.json())

        post = self.create_post(token, title="Alice's post", content="Content from alice")
        self.assertEqual(post["author"], alice_id)

        bob = self.register("bob", "bob@example.com", "secret2")
        resp = self.client.put(
            f"/api/posts/{post['id']}", json={"title": "Bob was here"}, headers=self.auth(bob["token"])
        )
        self.assertEqual(resp.status_code, 403)

        self.promote_to_admin(bob["user"]["id"])
        resp = self.client.delete(f"/api/posts/{post['id']}", headers=self.auth(bob["token"]))
        self.assertEqual(resp.status_code, 200)


if __name__ == "__main__":
    unittest.main()
