"""
Tests for trip, membership and invite endpoints.
"""
from datetime import date, timedelta


def test_create_trip(client, register, make_trip):
    alice = register("alice")
    trip = make_trip(alice, base_currency="jpy")

    assert trip["total_days"] == 7
    assert trip["base_currency"] == "JPY"
    assert trip["created_by"] == alice["id"]

    members = client.get(f"/api/trips/{trip['id']}/members", headers=alice["headers"]).json()
    assert [(m["user_id"], m["role"], m["is_me"]) for m in members] == [(alice["id"], "owner", True)]


def test_create_trip_defaults_currency(register, make_trip):
    trip = make_trip(register("alice"))
    assert trip["base_currency"] == "TWD"


def test_create_trip_rejects_reversed_dates(client, register):
    alice = register("alice")
    response = client.post(
        "/api/trips",
        json={"trip_name": "Backwards", "start_date": "2030-01-10", "end_date": "2030-01-09"},
        headers=alice["headers"]
    )
    assert response.status_code == 422


def test_list_trips_sorted_with_cover_and_countdown(client, register, make_trip):
    alice = register("alice")
    today = date.today()
    later = make_trip(alice, trip_name="Later", start_date=str(today + timedelta(days=30)),
                      end_date=str(today + timedelta(days=32)))
    past = make_trip(alice, trip_name="Past", start_date=str(today - timedelta(days=10)),
                     end_date=str(today - timedelta(days=8)))
    now = make_trip(alice, trip_name="Now", start_date=str(today), end_date=str(today + timedelta(days=1)))

    cards = client.get("/api/trips", headers=alice["headers"]).json()

    assert [c["id"] for c in cards] == [past["id"], now["id"], later["id"]]
    assert [c["countdown_status"] for c in cards] == ["ended", "today", "upcoming"]
    assert cards[2]["days_until"] == 30
    assert all(c["cover_image_url"].startswith("https://images.unsplash.com/") for c in cards)

    again = client.get("/api/trips", headers=alice["headers"]).json()
    assert [c["cover_image_url"] for c in again] == [c["cover_image_url"] for c in cards]


def test_non_member_cannot_see_trip(client, register, make_trip):
    alice = register("alice")
    bob = register("bob")
    trip = make_trip(alice)

    assert client.get(f"/api/trips/{trip['id']}", headers=bob["headers"]).status_code == 403
    assert client.get("/api/trips/9999", headers=bob["headers"]).status_code == 404
    assert client.get("/api/trips", headers=bob["headers"]).json() == []


def test_invite_link_and_join(client, register, make_trip, join):
    alice = register("alice")
    bob = register("bob")
    trip = make_trip(alice)

    link = client.get(f"/api/trips/{trip['id']}/invite", headers=alice["headers"]).json()
    assert link["invite_link"].endswith(f"/trips/{trip['id']}/join")

    preview = client.get(f"/api/trips/{trip['id']}/join", headers=bob["headers"]).json()
    assert preview == {"trip_id": trip["id"], "trip_name": trip["trip_name"], "already_member": False}

    first = join(bob, trip["id"])
    assert first["joined"] is True
    assert first["role"] == "member"

    detail = client.get(f"/api/trips/{trip['id']}", headers=bob["headers"]).json()
    assert [m["username"] for m in detail["members"]] == ["alice", "bob"]


def test_join_twice_is_not_an_error(client, register, make_trip, join):
    alice = register("alice")
    bob = register("bob")
    trip = make_trip(alice)

    join(bob, trip["id"])
    second = join(bob, trip["id"])
    assert second["joined"] is False

    members = client.get(f"/api/trips/{trip['id']}/members", headers=alice["headers"]).json()
    assert len(members) == 2


def test_join_unknown_trip(client, register):
    bob = register("bob")
    assert client.post("/api/trips/9999/join", headers=bob["headers"]).status_code == 404
    assert client.get("/api/trips/9999/join", headers=bob["headers"]).status_code == 404


def test_update_trip_recomputes_days(client, register, make_trip, join):
    alice = register("alice")
    bob = register("bob")
    trip = make_trip(alice)
    join(bob, trip["id"])

    response = client.patch(
        f"/api/trips/{trip['id']}", json={"end_date": "2030-01-11"}, headers=alice["headers"]
    )
    assert response.status_code == 200
    assert response.json()["total_days"] == 2

    forbidden = client.patch(
        f"/api/trips/{trip['id']}", json={"trip_name": "Mine now"}, headers=bob["headers"]
    )
    assert forbidden.status_code == 403

    reversed_dates = client.patch(
        f"/api/trips/{trip['id']}", json={"start_date": "2030-02-01"}, headers=alice["headers"]
    )
    assert reversed_dates.status_code == 422


def test_remove_member_rules(client, register, make_trip, join):
    alice = register("alice")
    bob = register("bob")
    carol = register("carol")
    trip = make_trip(alice)
    join(bob, trip["id"])
    join(carol, trip["id"])

    url = f"/api/trips/{trip['id']}/members"
    assert client.delete(f"{url}/{carol['id']}", headers=bob["headers"]).status_code == 403
    assert client.delete(f"{url}/{alice['id']}", headers=alice["headers"]).status_code == 400
    assert client.delete(f"{url}/{bob['id']}", headers=bob["headers"]).status_code == 200
    assert client.delete(f"{url}/{carol['id']}", headers=alice["headers"]).status_code == 200

    members = client.get(url, headers=alice["headers"]).json()
    assert [m["username"] for m in members] == ["alice"]


def test_delete_trip_owner_only(client, register, make_trip, join):
    alice = register("alice")
    bob = register("bob")
    trip = make_trip(alice)
    join(bob, trip["id"])

    assert client.delete(f"/api/trips/{trip['id']}", headers=bob["headers"]).status_code == 403
    assert client.delete(f"/api/trips/{trip['id']}", headers=alice["headers"]).status_code == 200
    assert client.get(f"/api/trips/{trip['id']}", headers=alice["headers"]).status_code == 404


def test_shortening_trip_keeps_planned_days_reachable(client, register, make_trip):
    alice = register("alice")
    trip = make_trip(alice)
    item = client.post(
        f"/api/itinerary/{trip['id']}",
        json={"trip_day": 7, "activity_name": "Farewell dinner", "period": "evening"},
        headers=alice["headers"]
    ).json()

    response = client.patch(f"/api/trips/{trip['id']}", json={"end_date": "2030-01-11"}, headers=alice["headers"])
    assert response.status_code == 422
    assert client.get(f"/api/trips/{trip['id']}", headers=alice["headers"]).json()["total_days"] == 7
    assert len(client.get(f"/api/itinerary/{trip['id']}/days/7", headers=alice["headers"]).json()["evening"]) == 1

    client.delete(f"/api/itinerary/{trip['id']}/items/{item['id']}", headers=alice["headers"])
    response = client.patch(f"/api/trips/{trip['id']}", json={"end_date": "2030-01-11"}, headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["total_days"] == 2
