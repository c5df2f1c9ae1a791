import uuid

import pytest

from app.models.organization import Invitation, Organization


@pytest.fixture
def organization(session):
    organization = Organization(name="Acme", slug="acme")
    session.add(organization)
    session.commit()
    session.refresh(organization)
    return organization


def test_get_by_slug(client, organization, user):
    response = client.get("/api/v1/organizations/acme")

    assert response.status_code == 200
    assert response.json()["name"] == "Acme"
    assert response.json()["id"] == str(organization.id)


def test_unknown_slug(client, user):
    response = client.get("/api/v1/organizations/nope")

    assert response.status_code == 404
    assert response.json()["detail"] == "Organization not found"


def test_invitation_includes_organization(client, session, organization, user):
    invitation = Invitation(organization_id=organization.id, email="alice@example.com", role="admin")
    session.add(invitation)
    session.commit()

    response = client.get(f"/api/v1/organizations/invitations/{invitation.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "alice@example.com"
    assert data["role"] == "admin"
    assert data["status"] == "pending"
    assert data["organization"]["slug"] == "acme"


def test_unknown_invitation(client, user):
    response = client.get(f"/api/v1/organizations/invitations/{uuid.uuid4()}")

    assert response.status_code == 404


def test_requires_login(client, organization, login):
    login(None)

    assert client.get("/api/v1/organizations/acme").status_code == 401
