# tests/test_tickets.py
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from app.main import app
from app.ticket import services as ticket_service

client = TestClient(app)


def new_ticket(**overrides):
    body = {
        "numero_ticket": "TCKT-001",
        "equipo": "Printer-A",
        "fecha_entrada": "2024-01-10",
        "fecha_inicio_servicio": "2024-01-11",
        "descripcion": "fix",
    }
    body.update(overrides)
    return body


def create(**overrides):
    r = client.post("/tickets", json=new_ticket(**overrides))
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_create_ticket_defaults_costs():
    r = client.post("/tickets", json=new_ticket())
    assert r.status_code == 201
    data = r.json()["data"]
    assert isinstance(data["id"], int)
    assert data["numero_ticket"] == "TCKT-001"
    assert data["fecha_entrada"] == "2024-01-10"
    assert data["fecha_fin_servicio"] is None
    assert data["costo_repuestos"] == 0
    assert data["costo_mano_obra"] == 0
    assert data["costos_externos_estimados"] == 0
    assert data["created_at"] and data["updated_at"]


def test_list_returns_newest_first():
    first = create(numero_ticket="A-1")
    second = create(numero_ticket="A-2")

    r = client.get("/tickets")
    assert r.status_code == 200
    ids = [t["id"] for t in r.json()["data"]]
    assert ids == [second["id"], first["id"]]


def test_list_empty():
    r = client.get("/tickets")
    assert r.status_code == 200
    assert r.json() == {"data": []}


def test_create_missing_field_names_first_absent():
    body = new_ticket()
    del body["equipo"]
    del body["descripcion"]
    r = client.post("/tickets", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Campo requerido: equipo"}


def test_create_empty_required_field():
    r = client.post("/tickets", json=new_ticket(numero_ticket=""))
    assert r.status_code == 400
    assert r.json()["error"] == "Campo requerido: numero_ticket"

    r2 = client.post("/tickets", json=new_ticket(fecha_inicio_servicio=""))
    assert r2.status_code == 400
    assert r2.json()["error"] == "Campo requerido: fecha_inicio_servicio"


def test_create_rejects_unparseable_date():
    r = client.post("/tickets", json=new_ticket(fecha_entrada="10/01/2024x"))
    assert r.status_code == 400
    assert r.json()["error"] == "Fecha inválida: fecha_entrada"
    assert client.get("/tickets").json()["data"] == []


def test_create_accepts_datetime_text():
    data = create(fecha_entrada="2024-01-10T00:00:00.000Z")
    assert data["fecha_entrada"] == "2024-01-10"


def test_create_coerces_costs():
    data = create(costo_repuestos="12.5", costo_mano_obra=30, costos_externos_estimados="n/a")
    assert data["costo_repuestos"] == 12.5
    assert data["costo_mano_obra"] == 30
    assert data["costos_externos_estimados"] == 0


def test_create_rejects_negative_cost():
    r = client.post("/tickets", json=new_ticket(costo_mano_obra=-5))
    assert r.status_code == 400
    assert r.json()["error"] == "Costo inválido: costo_mano_obra"


def test_create_duplicate_number():
    create()
    r = client.post("/tickets", json=new_ticket(equipo="Printer-B"))
    assert r.status_code == 400
    assert r.json() == {"error": "El número de ticket ya existe"}
    assert len(client.get("/tickets").json()["data"]) == 1


def test_create_store_failure_returns_500(monkeypatch):
    def boom(db, payload):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(ticket_service, "create_ticket", boom)
    r = client.post("/tickets", json=new_ticket())
    assert r.status_code == 500
    assert r.json() == {"error": "Error al crear ticket"}


def test_list_store_failure_returns_500(monkeypatch):
    def boom(db):
        raise SQLAlchemyError("no such table")

    monkeypatch.setattr(ticket_service, "get_all_tickets", boom)
    r = client.get("/tickets")
    assert r.status_code == 500
    assert r.json() == {"error": "Error al obtener tickets"}


def test_update_applies_only_given_fields():
    tid = create(costo_repuestos=10)["id"]

    r = client.put(f"/tickets/{tid}", json={"fecha_fin_servicio": "2024-01-15"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["id"] == tid
    assert data["fecha_fin_servicio"] == "2024-01-15"
    assert data["equipo"] == "Printer-A"
    assert data["costo_repuestos"] == 10


def test_update_ignores_read_only_keys():
    ticket = create()
    ticket["descripcion"] = "cambio de fusor"
    r = client.put(f"/tickets/{ticket['id']}", json=ticket)
    assert r.status_code == 200
    assert r.json()["data"]["descripcion"] == "cambio de fusor"
    assert r.json()["data"]["id"] == ticket["id"]


def test_update_cost_null_becomes_zero():
    tid = create(costo_mano_obra=50)["id"]
    r = client.put(f"/tickets/{tid}", json={"costo_mano_obra": None})
    assert r.status_code == 200
    assert r.json()["data"]["costo_mano_obra"] == 0


def test_update_can_reopen_ticket():
    tid = create(fecha_fin_servicio="2024-01-15")["id"]
    r = client.put(f"/tickets/{tid}", json={"fecha_fin_servicio": ""})
    assert r.status_code == 200
    assert r.json()["data"]["fecha_fin_servicio"] is None


def test_update_cannot_blank_required_field():
    tid = create()["id"]
    r = client.put(f"/tickets/{tid}", json={"equipo": None})
    assert r.status_code == 400
    assert r.json()["error"] == "Campo requerido: equipo"


def test_update_not_found():
    r = client.put("/tickets/999", json={"descripcion": "x"})
    assert r.status_code == 404
    assert r.json() == {"error": "Ticket no encontrado"}


def test_update_duplicate_number():
    create(numero_ticket="A-1")
    other = create(numero_ticket="A-2")
    r = client.put(f"/tickets/{other['id']}", json={"numero_ticket": "A-1"})
    assert r.status_code == 400
    assert r.json() == {"error": "El número de ticket ya existe"}


def test_update_invalid_id_skips_store(monkeypatch):
    def must_not_run(*args, **kwargs):
        raise AssertionError("store touched")

    monkeypatch.setattr(ticket_service, "update_ticket", must_not_run)
    r = client.put("/tickets/abc", json={"descripcion": "x"})
    assert r.status_code == 400
    assert r.json() == {"error": "ID de ticket inválido"}


def test_delete_ticket_then_404():
    tid = create()["id"]

    r = client.delete(f"/tickets/{tid}")
    assert r.status_code == 200
    assert r.json() == {"data": "Ticket eliminado exitosamente"}

    r2 = client.delete(f"/tickets/{tid}")
    assert r2.status_code == 404
    assert client.get("/tickets").json()["data"] == []


def test_delete_not_found():
    r = client.delete("/tickets/999")
    assert r.status_code == 404
    assert r.json() == {"error": "Ticket no encontrado"}


def test_delete_invalid_id(monkeypatch):
    def must_not_run(*args, **kwargs):
        raise AssertionError("store touched")

    monkeypatch.setattr(ticket_service, "delete_ticket", must_not_run)
    r = client.delete("/tickets/abc")
    assert r.status_code == 400
    assert r.json() == {"error": "ID de ticket inválido"}


def test_create_malformed_json():
    r = client.post(
        "/tickets",
        content="{not json",
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Cuerpo de la solicitud inválido"}


def test_unexpected_error_returns_json_500(monkeypatch):
    def boom(db, payload):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(ticket_service, "create_ticket", boom)
    lenient = TestClient(app, raise_server_exceptions=False)
    r = lenient.post("/tickets", json=new_ticket())
    assert r.status_code == 500
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == {"error": "Error interno del servidor"}


def test_update_store_failure_returns_500(monkeypatch):
    def boom(db, ticket_id, payload):
        raise SQLAlchemyError("database is locked")

    tid = create()["id"]
    monkeypatch.setattr(ticket_service, "update_ticket", boom)
    r = client.put(f"/tickets/{tid}", json={"descripcion": "x"})
    assert r.status_code == 500
    assert r.json() == {"error": "Error al actualizar el ticket"}


def test_delete_store_failure_returns_500(monkeypatch):
    def boom(db, ticket_id):
        raise SQLAlchemyError("database is locked")

    tid = create()["id"]
    monkeypatch.setattr(ticket_service, "delete_ticket", boom)
    r = client.delete(f"/tickets/{tid}")
    assert r.status_code == 500
    assert r.json() == {"error": "Error al eliminar el ticket"}


def test_out_of_range_id_is_invalid():
    huge = "99999999999999999999"
    r = client.put(f"/tickets/{huge}", json={"descripcion": "x"})
    assert r.status_code == 400
    assert r.json() == {"error": "ID de ticket inválido"}

    r2 = client.delete(f"/tickets/{huge}")
    assert r2.status_code == 400
    assert r2.json() == {"error": "ID de ticket inválido"}


def test_missing_field_reported_before_bad_date():
    body = new_ticket(fecha_entrada="not-a-date")
    del body["descripcion"]
    r = client.post("/tickets", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Campo requerido: descripcion"}

    body2 = new_ticket(fecha_fin_servicio="31/31/2024")
    del body2["descripcion"]
    r2 = client.post("/tickets", json=body2)
    assert r2.json() == {"error": "Campo requerido: descripcion"}


def test_cost_reads_leading_number():
    data = create(costo_repuestos="12abc", costo_mano_obra=" 7.5 USD")
    assert data["costo_repuestos"] == 12
    assert data["costo_mano_obra"] == 7.5
