import pytest

from app.core.errors import ValidationError
from app.core.security import verify_password
from services.users.service import create_user, get_user_by_username, update_permissions


class TestUserService:
    def test_password_is_hashed(self, db):
        user = create_user(db, username="jo", password="s3cret", name="Jo")
        assert user.password_hash != "s3cret"
        assert verify_password("s3cret", user.password_hash)
        assert not verify_password("wrong", user.password_hash)

    def test_defaults(self, db):
        user = create_user(db, username="jo", password="pw", name="Jo")
        assert user.role == "viewer"
        assert user.permissions == {"orderEdit": False, "inventoryEdit": False, "userCreation": False}

    def test_duplicate_username(self, db):
        create_user(db, username="jo", password="pw", name="Jo")
        with pytest.raises(ValidationError) as exc:
            create_user(db, username="jo", password="pw", name="Other Jo")
        assert exc.value.field == "username"

    def test_unknown_role(self, db):
        with pytest.raises(ValidationError) as exc:
            create_user(db, username="jo", password="pw", name="Jo", role="root")
        assert exc.value.field == "role"

    def test_permission_patch_keeps_other_flags(self, db):
        user = create_user(db, username="jo", password="pw", name="Jo", permissions={"orderEdit": True})
        user = update_permissions(db, user.id, {"userCreation": True})
        assert user.permissions == {"orderEdit": True, "inventoryEdit": False, "userCreation": True}

    def test_unknown_permission_flag(self, db):
        user = create_user(db, username="jo", password="pw", name="Jo")
        with pytest.raises(ValidationError):
            update_permissions(db, user.id, {"deleteEverything": True})

    def test_lookup_by_username(self, db):
        create_user(db, username="jo", password="pw", name="Jo")
        assert get_user_by_username(db, "jo").name == "Jo"
        assert get_user_by_username(db, "nobody") is None


class TestUsersApi:
    def test_password_never_returned(self, client):
        res = client.post("/api/users", json={
            "username": "sam", "password": "pw", "name": "Sam", "role": "warehouse_staff",
            "permissions": {"inventoryEdit": True},
        })
        assert res.status_code == 201
        body = res.json()
        assert "password" not in body
        assert "passwordHash" not in body
        assert body["permissions"] == {"orderEdit": False, "inventoryEdit": True, "userCreation": False}

        for listed in client.get("/api/users").json():
            assert "password" not in listed
        assert client.get(f"/api/users/{body['id']}").json()["username"] == "sam"

    def test_duplicate_username(self, client):
        payload = {"username": "sam", "password": "pw", "name": "Sam"}
        client.post("/api/users", json=payload)
        res = client.post("/api/users", json=payload)
        assert res.status_code == 400
        assert res.json()["field"] == "username"

    def test_permissions_patch(self, client):
        uid = client.post("/api/users", json={"username": "sam", "password": "pw", "name": "Sam"}).json()["id"]
        res = client.patch(f"/api/users/{uid}/permissions", json={"orderEdit": True})
        assert res.status_code == 200
        assert res.json()["permissions"]["orderEdit"] is True
        assert client.patch("/api/users/404/permissions", json={"orderEdit": True}).status_code == 404

    def test_missing_user(self, client):
        assert client.get("/api/users/9").json() == {"message": "User not found"}
