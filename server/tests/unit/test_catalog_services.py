"""Unit tests for hotel, visa and flight services."""

import json
from uuid import uuid4

import pytest

from support import asset_url, make_upload
from travel_admin.core.exceptions import NotFoundError, UpstreamServiceError, ValidationError
from travel_admin.models import Flight, Hotel, Visa
from travel_admin.schemas.flight import FlightForm
from travel_admin.schemas.hotel import HotelForm
from travel_admin.schemas.visa import VisaForm
from travel_admin.services.documents import DocumentService
from travel_admin.services.flight_service import FlightService
from travel_admin.services.hotel_service import HotelService
from travel_admin.services.visa_service import VisaService


async def _persist(session, document):
    session.add(document)
    await session.commit()
    await session.refresh(document)
    return document


def _flight_form(**overrides) -> FlightForm:
    fields = {
        "flight_number": "6E 204",
        "airline": "IndiGo",
        "departure": json.dumps({"iataCode": "del", "time": "06:10"}),
        "arrival": json.dumps({"iataCode": "GOI", "time": "08:45"}),
        "departure_date": "2026-12-20",
        "services": json.dumps([{"type": "Economy", "price": 5400}]),
    }
    fields.update(overrides)
    return FlightForm(**fields)


@pytest.mark.asyncio
async def test_create_hotel_with_gallery(test_session, object_store):
    service = HotelService(test_session, object_store)

    hotel = await service.create(
        HotelForm(title="Sea View", popular_amenities="Pool,Spa"),
        images=[make_upload("a.jpg"), make_upload("b.jpg")],
    )

    assert hotel.images == [asset.url for asset in object_store.uploads]
    assert hotel.popular_amenities == ["Pool", "Spa"]


@pytest.mark.asyncio
async def test_create_hotel_requires_title(test_session, object_store):
    service = HotelService(test_session, object_store)

    with pytest.raises(ValidationError):
        await service.create(HotelForm(location="Goa"))


@pytest.mark.asyncio
async def test_update_hotel_appends_upload_to_retained(test_session, object_store):
    """existingImages u1,u2 plus one new file gives u1,u2,u3 and deletes nothing."""
    u1, u2 = asset_url("hotels/u1"), asset_url("hotels/u2")
    stored = await _persist(test_session, Hotel(title="Sea View", images=[u1, u2]))
    service = HotelService(test_session, object_store)

    hotel = await service.update(
        str(stored.id),
        HotelForm(existing_images=json.dumps([u1, u2])),
        images=[make_upload()],
    )

    assert hotel.images == [u1, u2, object_store.uploads[0].url]
    assert object_store.destroyed == []


@pytest.mark.asyncio
async def test_update_hotel_deletes_images_left_out(test_session, object_store):
    u1, u2 = asset_url("hotels/u1"), asset_url("hotels/u2")
    stored = await _persist(test_session, Hotel(title="Sea View", images=[u1, u2]))
    service = HotelService(test_session, object_store)

    hotel = await service.update(str(stored.id), HotelForm(existing_images=json.dumps([u2])))

    assert hotel.images == [u2]
    assert object_store.destroyed == ["hotels/u1"]


@pytest.mark.asyncio
async def test_update_hotel_without_existing_images_keeps_all(test_session, object_store):
    u1 = asset_url("hotels/u1")
    stored = await _persist(test_session, Hotel(title="Sea View", images=[u1]))
    service = HotelService(test_session, object_store)

    hotel = await service.update(str(stored.id), HotelForm(overview="Renovated"), images=[make_upload()])

    assert hotel.images == [u1, object_store.uploads[0].url]
    assert hotel.overview == "Renovated"
    assert object_store.destroyed == []


@pytest.mark.asyncio
async def test_update_missing_hotel(test_session, object_store):
    service = HotelService(test_session, object_store)

    with pytest.raises(NotFoundError):
        await service.update(str(uuid4()), HotelForm(title="Ghost"))


@pytest.mark.asyncio
async def test_create_visa_keeps_declared_image(test_session, object_store):
    service = VisaService(test_session, object_store)

    visa = await service.create(VisaForm(name="Dubai", existing_image="https://cdn.example/visa.jpg"))

    assert visa.image == "https://cdn.example/visa.jpg"
    assert visa.required_documents == []


@pytest.mark.asyncio
async def test_update_visa_upload_replaces_image(test_session, object_store):
    stored = await _persist(test_session, Visa(name="Dubai", image=asset_url("visas/old"), required_documents=[]))
    service = VisaService(test_session, object_store)

    visa = await service.update(
        str(stored.id),
        VisaForm(required_documents='["Passport"]'),
        image=[make_upload()],
    )

    assert visa.image == object_store.uploads[0].url
    assert visa.required_documents == ["Passport"]
    assert object_store.destroyed == ["visas/old"]


@pytest.mark.asyncio
async def test_delete_visa_with_unrecognised_image_url(test_session, object_store):
    """A URL with no recoverable id issues no remote call and the record still goes."""
    stored = await _persist(
        test_session,
        Visa(name="Thailand", image="https://example.com/not-an-asset", required_documents=[]),
    )
    service = VisaService(test_session, object_store)

    report = await service.delete(str(stored.id))

    assert object_store.destroyed == []
    assert report.skipped == ["https://example.com/not-an-asset"]
    assert await service.get_by_id(stored.id) is None


@pytest.mark.asyncio
async def test_create_flight_normalises_leg_codes(test_session, object_store):
    service = FlightService(test_session, object_store)

    flight = await service.create(_flight_form(), logo=[make_upload("logo.png")])

    assert flight.origin_code == "DEL"
    assert flight.destination_code == "GOI"
    assert flight.logo == object_store.uploads[0].url


@pytest.mark.asyncio
async def test_create_flight_reports_missing_fields(test_session, object_store):
    service = FlightService(test_session, object_store)
    form = _flight_form(
        airline=None,
        arrival=json.dumps({"iataCode": "GOI"}),
        services=json.dumps([{"type": "Economy"}]),
    )

    with pytest.raises(ValidationError) as exc_info:
        await service.create(form)

    assert exc_info.value.problem_details["missing_fields"] == ["airline", "arrival.time", "services[0].price"]
    assert object_store.uploads == []


@pytest.mark.asyncio
async def test_update_flight_keeps_logo_without_upload(test_session, object_store):
    service = FlightService(test_session, object_store)
    created = await service.create(_flight_form(), logo=[make_upload("logo.png")])

    flight = await service.update(str(created.id), FlightForm(duration="2h 35m"))

    assert flight.duration == "2h 35m"
    assert flight.logo == created.logo
    assert object_store.destroyed == []


@pytest.mark.asyncio
async def test_search_flights(test_session, object_store):
    service = FlightService(test_session, object_store)
    match = await service.create(_flight_form())
    await service.create(_flight_form(flight_number="6E 500", departure_date="2026-12-21"))
    await service.create(_flight_form(flight_number="AI 1", arrival=json.dumps({"iataCode": "BOM", "time": "9"})))

    by_route = await service.search("del", "goi")
    by_date = await service.search("DEL", "GOI", "2026-12-20")

    assert len(by_route) == 2
    assert [f.id for f in by_date] == [match.id]


@pytest.mark.asyncio
async def test_search_flights_requires_both_airports(test_session):
    service = FlightService(test_session)

    with pytest.raises(ValidationError):
        await service.search("DEL", None)


@pytest.mark.asyncio
async def test_delete_flight_removes_logo(test_session, object_store):
    stored = await _persist(
        test_session,
        Flight(
            flight_number="AI 1",
            airline="Air India",
            logo=asset_url("flights/logo"),
            departure={"iataCode": "DEL", "time": "1"},
            arrival={"iataCode": "BOM", "time": "2"},
            services=[],
        ),
    )
    service = FlightService(test_session, object_store)

    report = await service.delete(str(stored.id))

    assert report.deleted == ["flights/logo"]


async def _failing_save(document):
    raise UpstreamServiceError(service="database", detail="Failed to save")


@pytest.mark.asyncio
async def test_create_hotel_discards_uploads_when_save_fails(test_session, object_store, monkeypatch):
    service = HotelService(test_session, object_store)
    monkeypatch.setattr(service, "_save", _failing_save)

    with pytest.raises(UpstreamServiceError):
        await service.create(HotelForm(title="Taj"), images=[make_upload("a.jpg"), make_upload("b.jpg")])

    assert object_store.destroyed == ["hotels/asset1", "hotels/asset2"]


@pytest.mark.asyncio
async def test_update_visa_save_failure_keeps_stored_image(test_session, object_store, monkeypatch):
    visa = await _persist(test_session, Visa(name="Dubai", image=asset_url("visas/old")))
    service = VisaService(test_session, object_store)
    monkeypatch.setattr(service, "_save", _failing_save)

    with pytest.raises(UpstreamServiceError):
        await service.update(str(visa.id), VisaForm(), image=[make_upload()])

    # A failed write orphans nothing that was stored before it
    assert object_store.destroyed == ["visas/asset1"]


@pytest.mark.asyncio
async def test_create_flight_discards_logo_when_save_fails(test_session, object_store, monkeypatch):
    service = FlightService(test_session, object_store)
    monkeypatch.setattr(service, "_save", _failing_save)

    with pytest.raises(UpstreamServiceError):
        await service.create(_flight_form(), logo=[make_upload()])

    assert object_store.destroyed == ["flights/asset1"]


def test_document_service_requires_image_urls():
    """Entity services must say where their images live."""

    class NoImages(DocumentService[Hotel]):
        model = Hotel
        resource_type = "hotel"
        asset_kind = "hotels"

    with pytest.raises(TypeError):
        NoImages(db=None)
