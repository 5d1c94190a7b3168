"""Helpers shared by the API tests."""


def vote_as(client, identity, option_id):
    """POST /votar on behalf of ``identity`` via X-Forwarded-For."""
    return client.post(
        "/votar",
        json={"optionId": option_id},
        headers={"X-Forwarded-For": identity},
    )


def counts_by_id(client):
    """Map option id to count from GET /resultados."""
    body = client.get("/resultados").json()
    return {row["id"]: row["cantidad"] for row in body["resultados"]}
