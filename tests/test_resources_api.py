"""HTTP tests for announcements, events, marketplace and contacts."""


class TestAnnouncementsApi:
    body = {"title": "Water outage", "content": "Tuesday 9-12", "category": "updates", "priority": "high"}

    def test_members_cannot_create(self, client, user_headers):
        response = client.post("/api/announcements", headers=user_headers, json=self.body)
        assert response.status_code == 403
        assert response.json()["error"]["details"]["requiredRoles"] == ["admin", "moderator"]

    def test_staff_lifecycle(self, client, moderator, moderator_headers):
        created = client.post("/api/announcements", headers=moderator_headers, json=self.body)
        assert created.status_code == 201
        announcement = created.json()["announcement"]
        assert announcement["authorId"] == moderator.id
        assert announcement["isPublished"] is False

        # drafts stay hidden from the public
        assert client.get(f"/api/announcements/{announcement['id']}").status_code == 404

        published = client.put(
            f"/api/announcements/{announcement['id']}",
            headers=moderator_headers,
            json={"isPublished": True},
        )
        assert published.status_code == 200
        assert client.get(f"/api/announcements/{announcement['id']}").status_code == 200
        assert client.get("/api/announcements").json()["pagination"]["totalItems"] == 1

        assert client.delete(f"/api/announcements/{announcement['id']}", headers=moderator_headers).status_code == 200

    def test_option_lists(self, client):
        assert client.get("/api/announcements/categories/list").json()["categories"][0]["value"] == "general"
        priorities = [p["value"] for p in client.get("/api/announcements/priorities/list").json()["priorities"]]
        assert priorities == ["low", "normal", "high", "urgent"]


class TestEventsApi:
    def event(self, **overrides):
        body = {
            "title": "Street party",
            "description": "Bring food",
            "date": "2030-06-01T16:00:00Z",
            "location": "Main street",
            "type": "meetup",
            "isPublished": True,
        }
        body.update(overrides)
        return body

    def test_create_requires_staff(self, client, user_headers, admin_headers):
        assert client.post("/api/events", headers=user_headers, json=self.event()).status_code == 403
        created = client.post("/api/events", headers=admin_headers, json=self.event())
        assert created.status_code == 201
        assert created.json()["event"]["currentAttendees"] == 0

    def test_end_before_start_is_400(self, client, admin_headers):
        response = client.post("/api/events", headers=admin_headers, json=self.event(endDate="2030-05-01T00:00:00Z"))
        assert response.status_code == 400

    def test_filter_and_sort(self, client, admin_headers):
        client.post("/api/events", headers=admin_headers, json=self.event(title="B", date="2030-07-01T10:00:00Z"))
        client.post("/api/events", headers=admin_headers, json=self.event(title="A", date="2030-06-01T10:00:00Z"))
        client.post("/api/events", headers=admin_headers, json=self.event(title="W", type="webinar", isOnline=True))

        titles = [e["title"] for e in client.get("/api/events?type=meetup").json()["items"]]
        assert titles == ["A", "B"]
        online = client.get("/api/events?isOnline=true").json()["items"]
        assert [e["title"] for e in online] == ["W"]

    def test_option_lists(self, client):
        assert "webinar" in [t["value"] for t in client.get("/api/events/types/list").json()["types"]]
        assert "cancelled" in [s["value"] for s in client.get("/api/events/statuses/list").json()["statuses"]]


class TestMarketplaceApi:
    item = {
        "title": "Road bike",
        "description": "Barely used",
        "price": 150,
        "currency": "EUR",
        "category": "sports",
        "condition": "like-new",
        "location": "Downtown",
    }

    def test_approval_flow(self, client, user_headers, other_headers, moderator_headers):
        created = client.post("/api/marketplace", headers=user_headers, json=self.item)
        assert created.status_code == 201
        item = created.json()["item"]
        assert item["isApproved"] is False

        assert client.get(f"/api/marketplace/{item['id']}", headers=other_headers).status_code == 404
        assert client.post(f"/api/marketplace/{item['id']}/approve", headers=other_headers).status_code == 403

        approved = client.post(f"/api/marketplace/{item['id']}/approve", headers=moderator_headers)
        assert approved.json()["item"]["isApproved"] is True
        assert client.get(f"/api/marketplace/{item['id']}").status_code == 200

    def test_seller_or_staff_can_delete(self, client, user_headers, other_headers, moderator_headers):
        item = client.post("/api/marketplace", headers=user_headers, json=self.item).json()["item"]
        assert client.delete(f"/api/marketplace/{item['id']}", headers=other_headers).status_code == 403
        assert client.delete(f"/api/marketplace/{item['id']}", headers=moderator_headers).status_code == 200

    def test_negative_price_rejected(self, client, user_headers):
        response = client.post("/api/marketplace", headers=user_headers, json={**self.item, "price": -1})
        assert response.status_code == 400
        assert "price" in response.json()["error"]["details"]

    def test_price_filters(self, client, admin_headers):
        for price in (10, 100, 1000):
            client.post("/api/marketplace", headers=admin_headers, json={**self.item, "price": price})
        items = client.get("/api/marketplace?minPrice=50&maxPrice=500").json()["items"]
        assert [i["price"] for i in items] == [100]

    def test_conditions_list(self, client):
        conditions = client.get("/api/marketplace/conditions/list").json()["conditions"]
        assert {"value": "like-new", "label": "Like New"} in conditions


class TestContactsApi:
    contact = {"name": "Jane Doe", "email": "jane@example.com", "department": "Engineering", "tags": ["backend"]}

    def test_requires_auth(self, client):
        assert client.get("/api/contacts").status_code == 401
        assert client.get("/api/contacts/departments/list").status_code == 401

    def test_crud(self, client, user, user_headers, other_headers):
        created = client.post("/api/contacts", headers=user_headers, json=self.contact)
        assert created.status_code == 201
        contact = created.json()["contact"]
        assert contact["createdById"] == user.id

        duplicate = client.post("/api/contacts", headers=other_headers, json=self.contact)
        assert duplicate.status_code == 409

        assert client.put(f"/api/contacts/{contact['id']}", headers=other_headers, json={"name": "X"}).status_code == 403
        updated = client.put(f"/api/contacts/{contact['id']}", headers=user_headers, json={"position": "CTO"})
        assert updated.json()["contact"]["position"] == "CTO"
        assert updated.json()["contact"]["name"] == "Jane Doe"

        listed = client.get("/api/contacts?department=Engineering&tags=backend", headers=other_headers).json()
        assert listed["pagination"]["totalItems"] == 1

        assert client.delete(f"/api/contacts/{contact['id']}", headers=user_headers).status_code == 200

    def test_short_phone_rejected(self, client, user_headers):
        response = client.post("/api/contacts", headers=user_headers, json={**self.contact, "phone": "123"})
        assert response.status_code == 400
        assert "phone" in response.json()["error"]["details"]

    def test_tags_and_stats(self, client, user_headers):
        client.post("/api/contacts", headers=user_headers, json=self.contact)
        assert client.get("/api/contacts/tags/list", headers=user_headers).json()["tags"] == ["backend"]
        stats = client.get("/api/contacts/stats/overview", headers=user_headers).json()["stats"]
        assert stats["totalContacts"] == 1
        assert stats["activeContacts"] == 1
