# barbershop/routers/clients_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session, select

from barbershop.auth import CurrentBarber, get_current_barber
from barbershop.db import get_session
from barbershop.deps import get_store
from barbershop.errors import ConflictError, NotFoundError
from barbershop.models import Client
from barbershop.schemas import ClientCreate, ClientPublic
from barbershop.store import AppointmentStore

router = APIRouter(
    prefix="/clientes",
    tags=["clients"],
)


def _ensure_phone_free(session: Session, phone) -> None:
    if phone is None:
        return
    existing = session.exec(select(Client).where(Client.phone == phone)).first()
    if existing is not None:
        raise ConflictError("Phone already registered")


@router.post("", response_model=ClientPublic, status_code=201)
def create_client(
    client: ClientCreate,
    session: Session = Depends(get_session),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    _ensure_phone_free(session, client.phone)
    db_client = Client(name=client.name, phone=client.phone)
    session.add(db_client)
    session.commit()
    session.refresh(db_client)
    return db_client


@router.get("", response_model=List[ClientPublic])
def list_clients(
    session: Session = Depends(get_session),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return session.exec(select(Client).order_by(Client.name)).all()


@router.get("/nome/{name}", response_model=List[ClientPublic])
def search_clients(
    name: str,
    session: Session = Depends(get_session),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    clients = session.exec(
        select(Client).where(Client.name.ilike(f"%{name}%")).order_by(Client.name)
    ).all()
    if not clients:
        raise NotFoundError("Client not found")
    return clients


@router.get("/{client_id}", response_model=ClientPublic)
def get_client(
    client_id: int,
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return store.get_client(client_id)


@router.put("/{client_id}", response_model=ClientPublic)
def update_client(
    client_id: int,
    client: ClientCreate,
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    db_client = store.get_client(client_id)
    if client.phone is not None and client.phone != db_client.phone:
        _ensure_phone_free(store.session, client.phone)

    db_client.name = client.name
    # the phone is written as given, so omitting it clears it
    db_client.phone = client.phone
    store.session.add(db_client)
    store.session.commit()
    store.session.refresh(db_client)
    return db_client


@router.delete("/{client_id}", status_code=204)
def delete_client(
    client_id: int,
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    db_client = store.get_client(client_id)
    if store.client_in_use(client_id):
        raise ConflictError("Client has appointments and cannot be deleted")
    store.session.delete(db_client)
    store.session.commit()
    return Response(status_code=204)
