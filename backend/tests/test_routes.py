"""
Aula Backend — HTTP Route Tests
=================================

What:  The HTTP contract of every resource: envelope, status codes,
       filtering, ordering and error mapping.
How:   httpx AsyncClient over ASGITransport, InMemoryStore behind get_store.
"""

import logging
import uuid

import pytest

from app.config import settings
from app.exceptions import StoreError


class TestEnvelope:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/materias", "/api/mensajes", "/api/noticias", "/api/tareas"])
    async def test_empty_list_uses_success_envelope(self, test_client, path):
        """An empty collection should still use the success envelope."""
        response = await test_client.get(path)

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    @pytest.mark.asyncio
    async def test_store_failure_is_500_without_details(self, test_client, store):
        """A store failure should be a 500 envelope without details."""
        store.fail_with = StoreError(
            message="Error loading materias",
            context={"error_type": "OperationalError"},
        )

        response = await test_client.get("/api/materias")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Error loading materias"
        assert body["code"] == "store_error"
        assert body["details"] is None
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, test_client):
        """A client-supplied X-Request-ID should be echoed back."""
        response = await test_client.get("/api/noticias", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"


class TestMaterias:

    @pytest.mark.asyncio
    async def test_create_then_list(self, test_client):
        """A created subject should be returned with 201 and then listed."""
        profesor_id = str(uuid.uuid4())
        response = await test_client.post(
            "/api/materias",
            json={"nombre": "Física", "descripcion": "Mecánica clásica", "profesor_id": profesor_id},
        )

        assert response.status_code == 201
        created = response.json()["data"]
        assert created["nombre"] == "Física"
        assert created["profesor_id"] == profesor_id
        assert created["id"]
        assert created["creado_en"]

        listed = (await test_client.get("/api/materias")).json()["data"]
        assert [m["id"] for m in listed] == [created["id"]]

    @pytest.mark.asyncio
    async def test_missing_nombre_is_400(self, test_client, store):
        """Creating a subject without nombre should return 400."""
        response = await test_client.post("/api/materias", json={"descripcion": "sin nombre"})

        assert response.status_code == 400
        assert response.json()["error"] == "nombre is required"
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_newest_first(self, test_client, store, at):
        """Subjects should be listed newest first."""
        store.seed("materias", nombre="A", creado_en=at(0))
        store.seed("materias", nombre="C", creado_en=at(2))
        store.seed("materias", nombre="B", creado_en=at(1))

        data = (await test_client.get("/api/materias")).json()["data"]

        assert [m["nombre"] for m in data] == ["C", "B", "A"]


class TestTareas:

    @pytest.mark.asyncio
    async def test_missing_materia_id_is_400(self, test_client, store):
        """Creating a task without materia_id should return 400 naming it."""
        response = await test_client.post("/api/tareas", json={"titulo": "Homework 1"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "materia_id" in body["error"]
        assert body["code"] == "validation_error"
        assert body["details"] == {"fields": ["materia_id"]}
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client, store):
        """Malformed JSON should return 400 without touching the store."""
        response = await test_client.post(
            "/api/tareas",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Request body must be valid JSON"
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_filter_by_subject_orders_by_deadline(self, test_client, store, at):
        """Tasks of one subject should be ordered by deadline, undated last."""
        fisica, quimica = uuid.uuid4(), uuid.uuid4()
        store.seed("tareas", materia_id=fisica, titulo="Sin fecha", fecha_limite=None)
        store.seed("tareas", materia_id=fisica, titulo="Segunda", fecha_limite=at(5))
        store.seed("tareas", materia_id=quimica, titulo="Otra materia", fecha_limite=at(1))
        store.seed("tareas", materia_id=fisica, titulo="Primera", fecha_limite=at(3))

        response = await test_client.get("/api/tareas", params={"materia_id": str(fisica)})

        assert response.status_code == 200
        data = response.json()["data"]
        assert [t["titulo"] for t in data] == ["Primera", "Segunda", "Sin fecha"]

    @pytest.mark.asyncio
    async def test_blank_filter_returns_everything(self, test_client, store, at):
        """A blank materia_id should return every task."""
        store.seed("tareas", materia_id=uuid.uuid4(), titulo="Uno", fecha_limite=at(1))
        store.seed("tareas", materia_id=uuid.uuid4(), titulo="Dos", fecha_limite=at(2))

        response = await test_client.get("/api/tareas?materia_id=")

        assert [t["titulo"] for t in response.json()["data"]] == ["Uno", "Dos"]

    @pytest.mark.asyncio
    async def test_invalid_subject_id_is_400(self, test_client, store):
        """A materia_id that is not a UUID should return 400."""
        response = await test_client.get("/api/tareas", params={"materia_id": "abc"})

        assert response.status_code == 400
        assert response.json()["error"] == "materia_id must be a valid UUID"
        assert store.calls == []


class TestNoticias:

    @pytest.mark.asyncio
    async def test_category_filter_returns_only_matches_newest_first(self, test_client, store, at):
        """A category filter should return only its news, newest first."""
        store.seed("noticias", titulo="Final", contenido="...", categoria="deportes", creado_en=at(1))
        store.seed("noticias", titulo="Examenes", contenido="...", categoria="academico", creado_en=at(2))
        store.seed("noticias", titulo="Torneo", contenido="...", categoria="deportes", creado_en=at(3))
        store.seed("noticias", titulo="Feria", contenido="...", categoria="eventos", creado_en=at(4))
        store.seed("noticias", titulo="Becas", contenido="...", categoria="academico", creado_en=at(5))

        response = await test_client.get("/api/noticias", params={"categoria": "deportes"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert [n["titulo"] for n in data] == ["Torneo", "Final"]

    @pytest.mark.asyncio
    async def test_unknown_query_parameter_is_ignored(self, test_client, store, at):
        """Unknown query parameters should not filter anything."""
        store.seed("noticias", titulo="A", contenido="...", categoria="deportes", creado_en=at(1))
        store.seed("noticias", titulo="B", contenido="...", categoria="eventos", creado_en=at(2))

        response = await test_client.get("/api/noticias", params={"tipo": "deportes"})

        assert [n["titulo"] for n in response.json()["data"]] == ["B", "A"]

    @pytest.mark.asyncio
    async def test_repeated_get_is_identical(self, test_client, store, at):
        """Two identical GETs should return identical bodies."""
        store.seed("noticias", titulo="A", contenido="...", categoria="deportes", creado_en=at(1))

        first = await test_client.get("/api/noticias?categoria=deportes")
        second = await test_client.get("/api/noticias?categoria=deportes")

        assert first.json() == second.json()

    @pytest.mark.asyncio
    async def test_create_requires_titulo_and_contenido(self, test_client):
        """Creating news without titulo and contenido should name both."""
        response = await test_client.post("/api/noticias", json={"categoria": "deportes"})

        assert response.status_code == 400
        assert response.json()["error"] == "titulo, contenido are required"


class TestMensajes:

    @pytest.mark.asyncio
    async def test_participant_filter_matches_sender_or_receiver(self, test_client, store, at):
        """usuario_id should match messages sent or received."""
        ana, beto, carla = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        store.seed("mensajes", remitente_id=ana, receptor_id=beto, contenido="hola beto", creado_en=at(1))
        store.seed("mensajes", remitente_id=beto, receptor_id=ana, contenido="hola ana", creado_en=at(2))
        store.seed("mensajes", remitente_id=beto, receptor_id=carla, contenido="hola carla", creado_en=at(3))

        response = await test_client.get("/api/mensajes", params={"usuario_id": str(ana)})

        assert [m["contenido"] for m in response.json()["data"]] == ["hola ana", "hola beto"]

    @pytest.mark.asyncio
    async def test_send_requires_contenido(self, test_client):
        """Sending a message without contenido should return 400."""
        response = await test_client.post("/api/mensajes", json={"remitente_id": str(uuid.uuid4())})

        assert response.status_code == 400
        assert response.json()["error"] == "contenido is required"

    @pytest.mark.asyncio
    async def test_send_returns_stored_row(self, test_client):
        """Sending a message should return the stored row with 201."""
        remitente = str(uuid.uuid4())
        response = await test_client.post(
            "/api/mensajes",
            json={"remitente_id": remitente, "contenido": "¿Hay clase mañana?"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["remitente_id"] == remitente
        assert data["receptor_id"] is None
        assert data["contenido"] == "¿Hay clase mañana?"


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        """Health should report a reachable database as healthy."""
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_logs_configured_address(self, api, monkeypatch, caplog):
        """Startup should log the configured host and port for the server and docs."""
        # basicConfig(force=True) would drop pytest's capture handler
        monkeypatch.setattr("app.main.setup_logging", lambda: None)

        with caplog.at_level(logging.INFO, logger="app.main"):
            async with api.router.lifespan_context(api):
                pass

        address = f"http://{settings.backend_host}:{settings.backend_port}"
        assert f"Server ready at {address}" in caplog.messages
        assert f"API docs: {address}/docs" in caplog.messages
