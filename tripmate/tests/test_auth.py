"""
Tests for authentication endpoints.
"""


def test_signup(client):
    """Test user signup."""
    response = client.post(
        "/api/auth/signup",
        json={
            "username": "testuser",
            "email": "test@example.com",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 201
    assert response.json()["username"] == "testuser"
    assert "hashed_password" not in response.json()


def test_signup_duplicate_username(client):
    payload = {"username": "dup", "email": "dup@example.com", "password": "testpassword123"}
    client.post("/api/auth/signup", json=payload)

    response = client.post("/api/auth/signup", json={**payload, "email": "other@example.com"})
    assert response.status_code == 400


def test_login(client):
    """Test user login."""
    client.post(
        "/api/auth/signup",
        json={
            "username": "testuser2",
            "email": "test2@example.com",
            "password": "testpassword123"
        }
    )

    response = client.post(
        "/api/auth/login",
        json={
            "username": "testuser2",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_invalid_credentials(client):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/auth/login",
        json={
            "username": "nonexistent",
            "password": "wrongpassword"
        }
    )
    assert response.status_code == 401


def test_me_requires_token(client):
    assert client.get("/api/users/me").status_code == 401
    bad = {"Authorization": "Bearer not-a-jwt"}
    assert client.get("/api/users/me", headers=bad).status_code == 401


def test_me(register, client):
    alice = register("alice")
    response = client.get("/api/users/me", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["email"] == "alice@example.com"
