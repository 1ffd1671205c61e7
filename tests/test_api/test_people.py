"""API tests for /pessoas."""
import pytest

pytestmark = pytest.mark.asyncio


async def test_create_and_list_people_sorted(client, api):
    await api.person("Pedro", email="pedro@example.com")
    await api.person("Ana", telefone="11 98888-0000")

    res = await client.get("/pessoas")
    assert res.status_code == 200
    assert [p["nome"] for p in res.json()] == ["Ana", "Pedro"]


async def test_create_person_requires_name(client):
    res = await client.post("/pessoas", json={"email": "x@example.com"})
    assert res.status_code == 400
    assert "error" in res.json()


async def test_update_person(client, api):
    p = await api.person("Maria")
    res = await client.put(f"/pessoas/{p['id']}", json={"nome": "Maria Silva", "telefone": "1234"})
    assert res.status_code == 200
    assert res.json()["nome"] == "Maria Silva"
    assert res.json()["telefone"] == "1234"


async def test_update_unknown_person_404(client):
    res = await client.put("/pessoas/9999", json={"nome": "Ninguém"})
    assert res.status_code == 404


async def test_delete_person_holding_territory_is_refused(client, api):
    t12 = await api.territory("12", "Centro")
    maria = await api.person("Maria")
    await api.assign(t12["id"], maria["id"], "2025-01-10")

    res = await client.delete(f"/pessoas/{maria['id']}")
    assert res.status_code == 400
    assert "território em campo" in res.json()["error"]

    await api.give_back(t12["id"], "2025-02-01")
    res = await client.delete(f"/pessoas/{maria['id']}")
    assert res.status_code == 200
    assert res.json()["data"]["nome"] == "Maria"

    # History survives without the person
    history = (await client.get("/historico-completo")).json()
    assert history[0]["historico"] == [{
        "pessoa_nome": None,
        "data_saida": "2025-01-10",
        "data_devolucao": "2025-02-01",
        "campanha_titulo": None,
    }]
    assert (await client.get("/pessoas")).json() == []


async def test_delete_unknown_person_404(client):
    res = await client.delete("/pessoas/9999")
    assert res.status_code == 404
