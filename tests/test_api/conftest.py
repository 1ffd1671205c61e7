import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from app.main import app
from app.database import get_db, get_sessionmaker
from app.services.storage_service import LocalBlobStore, get_blob_store


@pytest_asyncio.fixture
async def client(session_factory, tmp_path):
    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_sessionmaker] = lambda: session_factory
    app.dependency_overrides[get_blob_store] = lambda: LocalBlobStore(str(tmp_path / "uploads"), "http://test")

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api(client):
    """Small helpers for setting up state through the HTTP surface."""

    class Api:
        async def person(self, nome="Maria", **kw):
            res = await client.post("/pessoas", json={"nome": nome, **kw})
            assert res.status_code == 201, res.text
            return res.json()

        async def territory(self, numero="12", descricao="Centro", **kw):
            res = await client.post("/territorios", data={"numero": numero, "descricao": descricao, **kw})
            assert res.status_code == 201, res.text
            return res.json()

        async def campaign(self, titulo="Campanha de Março", data_inicio="2025-03-01", data_fim="2025-03-31"):
            res = await client.post(
                "/campanhas", json={"titulo": titulo, "data_inicio": data_inicio, "data_fim": data_fim}
            )
            assert res.status_code == 201, res.text
            return res.json()

        async def assign(self, territorio_id, pessoa_id, data_saida="2025-01-10", campanha_id=None):
            return await client.post("/designacoes", json={
                "territorio_id": territorio_id,
                "pessoa_id": pessoa_id,
                "data_saida": data_saida,
                "campanha_id": campanha_id,
            })

        async def give_back(self, territorio_id, data_devolucao="2025-02-01"):
            return await client.put(
                "/designacoes/devolver",
                json={"territorio_id": territorio_id, "data_devolucao": data_devolucao},
            )

    return Api()
