import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.services.storage_service import get_blob_store

pytestmark = pytest.mark.asyncio


async def test_create_territory_without_image(client, api):
    t = await api.territory("12", "Centro", tipo="Residencial", observacoes="Prédio com porteiro")
    assert t["numero"] == "12"
    assert t["descricao"] == "Centro"
    assert t["tipo"] == "Residencial"
    assert t["status"] == "Disponível"
    assert t["url_imagem"] is None
    assert t["grupo_id"] is None


async def test_create_territory_with_image(client, tmp_path):
    res = await client.post(
        "/territorios",
        data={"numero": "4", "descricao": "Jardim"},
        files={"imagem": ("Mapa.PNG", b"\x89PNG fake", "image/png")},
    )
    assert res.status_code == 201
    url = res.json()["url_imagem"]
    assert url.startswith("http://test/uploads/mapas/mapa-")
    assert url.endswith(".png")

    key = url.removeprefix("http://test/uploads/")
    assert (tmp_path / "uploads" / key).read_bytes() == b"\x89PNG fake"


async def test_create_territory_requires_numero_and_descricao(client):
    res = await client.post("/territorios", data={"numero": "3"})
    assert res.status_code == 400
    assert res.json() == {"error": "Número e Descrição do Território são obrigatórios."}


async def test_create_territory_rejects_non_numeric_numero(client):
    res = await client.post("/territorios", data={"numero": "12A", "descricao": "Centro"})
    assert res.status_code == 400


async def test_list_sorts_numerically_by_default(client, api):
    for numero in ["10", "2", "1"]:
        await api.territory(numero, f"Território {numero}")

    res = await client.get("/territorios")
    assert res.status_code == 200
    assert [t["numero"] for t in res.json()] == ["1", "2", "10"]


async def test_list_filters_by_status_and_search(client, api):
    t1 = await api.territory("1", "Vila Nova")
    await api.territory("2", "Centro")
    await api.territory("3", "Vila Rica")
    maria = await api.person("Maria")
    await api.assign(t1["id"], maria["id"])

    in_field = (await client.get("/territorios", params={"status": "Em campo"})).json()
    assert [t["numero"] for t in in_field] == ["1"]
    assert in_field[0]["pessoa_nome"] == "Maria"
    assert in_field[0]["data_saida"] == "2025-01-10"

    available = (await client.get("/territorios", params={"status": "Disponível"})).json()
    assert [t["numero"] for t in available] == ["2", "3"]

    vila = (await client.get("/territorios", params={"search": "vila"})).json()
    assert [t["numero"] for t in vila] == ["1", "3"]


async def test_list_rejects_unknown_status(client):
    res = await client.get("/territorios", params={"status": "Perdido"})
    assert res.status_code == 400


async def test_list_sorted_by_last_return_and_description(client, api):
    a = await api.territory("1", "Bela Vista")
    b = await api.territory("2", "Aurora")
    await api.territory("3", "Centro")
    maria = await api.person("Maria")
    await api.assign(a["id"], maria["id"], "2025-01-01")
    await api.give_back(a["id"], "2025-01-20")
    await api.assign(b["id"], maria["id"], "2025-02-01")
    await api.give_back(b["id"], "2025-03-01")

    by_return = (await client.get("/territorios", params={"sort": "devolucao_desc"})).json()
    assert [t["numero"] for t in by_return] == ["2", "1", "3"]
    assert by_return[0]["ultima_devolucao"] == "2025-03-01"
    assert by_return[2]["ultima_devolucao"] is None

    by_description = (await client.get("/territorios", params={"sort": "descricao_asc"})).json()
    assert [t["descricao"] for t in by_description] == ["Aurora", "Bela Vista", "Centro"]


async def test_list_not_worked_in_campaign(client, api):
    t1 = await api.territory("1", "Norte")
    await api.territory("2", "Sul")
    maria = await api.person("Maria")
    camp = await api.campaign()
    await api.assign(t1["id"], maria["id"], "2025-03-02", campanha_id=camp["id"])
    await api.give_back(t1["id"], "2025-03-10")

    res = await client.get("/territorios", params={"nao_trabalhado_na_campanha": camp["id"]})
    assert [t["numero"] for t in res.json()] == ["2"]


async def test_update_territory(client, api):
    t = await api.territory("5", "Antigo")
    res = await client.put(
        f"/territorios/{t['id']}",
        json={"numero": "6", "descricao": "Novo", "tipo": "Comercial", "observacoes": None},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["numero"] == "6"
    assert body["descricao"] == "Novo"
    assert body["tipo"] == "Comercial"
    assert body["status"] == "Disponível"


async def test_update_unknown_territory_404(client):
    res = await client.put("/territorios/9999", json={"numero": "1", "descricao": "X"})
    assert res.status_code == 404
    assert res.json() == {"error": "Território não encontrado."}


async def test_delete_territory_in_field_is_refused(client, api):
    t = await api.territory("8", "Lagoa")
    maria = await api.person("Maria")
    await api.assign(t["id"], maria["id"])

    res = await client.delete(f"/territorios/{t['id']}")
    assert res.status_code == 400
    assert "em campo" in res.json()["error"]

    await api.give_back(t["id"])
    res = await client.delete(f"/territorios/{t['id']}")
    assert res.status_code == 200
    assert res.json()["data"]["numero"] == "8"
    assert (await client.get("/territorios")).json() == []
    assert (await client.get("/historico-completo")).json() == []


async def test_full_history(client, api):
    t1 = await api.territory("1", "Norte")
    await api.territory("2", "Sul")
    maria = await api.person("Maria")
    joao = await api.person("João")
    camp = await api.campaign("Convite")
    await api.assign(t1["id"], maria["id"], "2025-01-05")
    await api.give_back(t1["id"], "2025-01-30")
    await api.assign(t1["id"], joao["id"], "2025-03-02", campanha_id=camp["id"])

    history = (await client.get("/historico-completo")).json()
    assert [h["numero"] for h in history] == ["1", "2"]
    assert history[0]["historico"] == [
        {"pessoa_nome": "João", "data_saida": "2025-03-02", "data_devolucao": None, "campanha_titulo": "Convite"},
        {"pessoa_nome": "Maria", "data_saida": "2025-01-05", "data_devolucao": "2025-01-30", "campanha_titulo": None},
    ]
    assert history[1]["historico"] == []


class _BrokenBlobStore:
    async def save(self, content, filename):
        raise OSError("disco cheio")


async def test_upload_failure_answers_json_error(client):
    # The server error middleware re-raises after responding, so read the response without raising
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    app.dependency_overrides[get_blob_store] = lambda: _BrokenBlobStore()
    async with AsyncClient(transport=transport, base_url="http://test") as broken:
        res = await broken.post(
            "/territorios",
            data={"numero": "4", "descricao": "Jardim"},
            files={"imagem": ("mapa.png", b"\x89PNG fake", "image/png")},
        )

    assert res.status_code == 500
    assert res.headers["content-type"] == "application/json"
    assert res.json() == {"error": "Erro interno do servidor."}
    assert (await client.get("/territorios")).json() == []
