"""Unit tests for package service."""

import json
from uuid import uuid4

import pytest

from support import asset_url, make_upload
from travel_admin.core.exceptions import NotFoundError, UpstreamServiceError, ValidationError
from travel_admin.models.package import Package
from travel_admin.schemas.package import PackageForm
from travel_admin.services.package_service import PackageService


async def _stored_package(session, **overrides) -> Package:
    fields = {
        "title": "Goa Beach Escape",
        "price": 15000.0,
        "days": "4",
        "thumbnail": asset_url("packages/thumb"),
        "images": [asset_url("packages/g1"), asset_url("packages/g2")],
        "activities": [
            {"title": "Dive", "images": [asset_url("packages/a1")]},
            {"title": "Hike", "images": [asset_url("packages/a2"), asset_url("packages/a3")]},
        ],
    }
    fields.update(overrides)
    package = Package(**fields)
    session.add(package)
    await session.commit()
    await session.refresh(package)
    return package


@pytest.mark.asyncio
async def test_create_package_with_thumbnail_only(test_session, object_store):
    """A single thumbnail upload and nothing else."""
    service = PackageService(test_session, object_store)

    package = await service.create(PackageForm(title="Goa"), thumbnail=[make_upload()])

    assert package.id is not None
    assert package.thumbnail == object_store.uploads[0].url
    assert package.images == []
    assert package.activities == []
    assert len(object_store.uploads) == 1


@pytest.mark.asyncio
async def test_create_package_requires_title(test_session, object_store):
    service = PackageService(test_session, object_store)

    with pytest.raises(ValidationError) as exc_info:
        await service.create(PackageForm(price="100"))

    assert exc_info.value.problem_details["missing_fields"] == ["title"]
    assert object_store.uploads == []


@pytest.mark.asyncio
async def test_create_package_shares_activity_uploads_by_count(test_session, object_store):
    """Activity uploads are handed out in order, imageCount each (default 1)."""
    service = PackageService(test_session, object_store)
    form = PackageForm(
        title="Andaman",
        activities=json.dumps([
            {"title": "Snorkel", "imageCount": 2, "images": ["https://elsewhere/x.jpg"]},
            {"title": "Kayak"},
        ]),
    )

    package = await service.create(
        form,
        activity_images=[make_upload("a.jpg"), make_upload("b.jpg"), make_upload("c.jpg")],
    )

    urls = [asset.url for asset in object_store.uploads]
    assert package.activities[0]["images"] == urls[0:2]
    assert package.activities[1]["images"] == urls[2:3]
    assert "imageCount" not in package.activities[0]
    assert package.activities[0]["title"] == "Snorkel"


@pytest.mark.asyncio
async def test_create_package_caps_gallery(test_session, object_store):
    service = PackageService(test_session, object_store)

    package = await service.create(
        PackageForm(title="Big"),
        images=[make_upload(f"{n}.jpg") for n in range(11)],
    )

    assert len(package.images) == 10
    # The overflow stays stored remotely; it is not deleted
    assert object_store.destroyed == []


@pytest.mark.asyncio
async def test_update_gallery_with_existing_images(test_session, object_store):
    """Stored images left out of existingImages are deleted after saving."""
    stored = await _stored_package(test_session)
    service = PackageService(test_session, object_store)

    package = await service.update(
        str(stored.id),
        PackageForm(existing_images=json.dumps([asset_url("packages/g2")])),
        images=[make_upload()],
    )

    assert package.images == [asset_url("packages/g2"), object_store.uploads[0].url]
    assert object_store.destroyed == ["packages/g1"]
    assert package.thumbnail == asset_url("packages/thumb")


@pytest.mark.asyncio
async def test_update_without_existing_images_keeps_gallery(test_session, object_store):
    stored = await _stored_package(test_session)
    service = PackageService(test_session, object_store)

    package = await service.update(str(stored.id), PackageForm(title="Renamed", existing_images="garbage"))

    assert package.title == "Renamed"
    assert package.images == [asset_url("packages/g1"), asset_url("packages/g2")]
    assert object_store.destroyed == []


@pytest.mark.asyncio
async def test_update_thumbnail_replaces_and_deletes_old(test_session, object_store):
    stored = await _stored_package(test_session)
    service = PackageService(test_session, object_store)

    package = await service.update(str(stored.id), PackageForm(), thumbnail=[make_upload()])

    assert package.thumbnail == object_store.uploads[0].url
    assert object_store.destroyed == ["packages/thumb"]


@pytest.mark.asyncio
async def test_update_empty_existing_thumbnail_clears_it(test_session, object_store):
    stored = await _stored_package(test_session)
    service = PackageService(test_session, object_store)

    package = await service.update(str(stored.id), PackageForm(existing_thumbnail=""))

    assert package.thumbnail is None
    assert object_store.destroyed == ["packages/thumb"]


@pytest.mark.asyncio
async def test_update_removed_activity_orphans_its_images(test_session, object_store):
    """Activities dropped from the declared list take their images with them."""
    stored = await _stored_package(test_session)
    service = PackageService(test_session, object_store)

    package = await service.update(
        str(stored.id),
        PackageForm(activities=json.dumps([{"title": "Dive, now at night"}])),
    )

    assert package.activities == [{"title": "Dive, now at night", "images": [asset_url("packages/a1")]}]
    assert sorted(object_store.destroyed) == ["packages/a2", "packages/a3"]


@pytest.mark.asyncio
async def test_update_activity_declared_images_and_upload(test_session, object_store):
    stored = await _stored_package(test_session)
    service = PackageService(test_session, object_store)
    declared = [
        {"title": "Dive", "images": [], "imageCount": 0},
        {"title": "Hike", "images": [asset_url("packages/a3")], "imageCount": 1},
    ]

    package = await service.update(
        str(stored.id),
        PackageForm(activities=json.dumps(declared)),
        activity_images=[make_upload()],
    )

    assert package.activities[0]["images"] == []
    assert package.activities[1]["images"] == [asset_url("packages/a3"), object_store.uploads[0].url]
    assert sorted(object_store.destroyed) == ["packages/a1", "packages/a2"]


@pytest.mark.asyncio
async def test_update_missing_package(test_session, object_store):
    service = PackageService(test_session, object_store)

    with pytest.raises(NotFoundError):
        await service.update(str(uuid4()), PackageForm(title="Nope"))


@pytest.mark.asyncio
async def test_get_package_with_malformed_id(test_session):
    service = PackageService(test_session)

    with pytest.raises(NotFoundError):
        await service.get_by_id_or_raise("not-a-uuid")


@pytest.mark.asyncio
async def test_delete_package_removes_every_image(test_session, object_store):
    stored = await _stored_package(test_session)
    service = PackageService(test_session, object_store)

    report = await service.delete(str(stored.id))

    assert sorted(report.deleted) == [
        "packages/a1", "packages/a2", "packages/a3", "packages/g1", "packages/g2", "packages/thumb",
    ]
    assert report.failed == []
    assert await service.get_by_id(stored.id) is None


@pytest.mark.asyncio
async def test_delete_package_survives_remote_failures(test_session, object_store):
    stored = await _stored_package(test_session)
    object_store.fail_destroy.add("packages/g1")
    service = PackageService(test_session, object_store)

    report = await service.delete(str(stored.id))

    assert report.failed == ["packages/g1"]
    assert await service.get_by_id(stored.id) is None


@pytest.mark.asyncio
async def test_search_falls_back_to_title_only(test_session):
    """A price range matching nothing still returns the title matches."""
    stored = await _stored_package(test_session)
    await _stored_package(test_session, title="Kerala Backwaters", price=9000.0)
    service = PackageService(test_session)

    packages = await service.search("goa", min_price=1, max_price=2)

    assert [p.id for p in packages] == [stored.id]


@pytest.mark.asyncio
async def test_search_narrows_by_price(test_session):
    cheap = await _stored_package(test_session, title="Goa Budget", price=8000.0)
    await _stored_package(test_session, title="Goa Luxury", price=40000.0)
    service = PackageService(test_session)

    packages = await service.search("Goa", min_price=5000, max_price=10000)

    assert [p.id for p in packages] == [cheap.id]


@pytest.mark.asyncio
async def test_search_without_title_is_empty(test_session):
    await _stored_package(test_session)
    service = PackageService(test_session)

    assert await service.search(None) == []
    assert await service.search("") == []


@pytest.mark.asyncio
async def test_search_escapes_like_wildcards(test_session):
    await _stored_package(test_session)
    service = PackageService(test_session)

    assert await service.search("%") == []


@pytest.mark.asyncio
async def test_distinct_prices(test_session):
    await _stored_package(test_session, price=9000.0)
    await _stored_package(test_session, price=15000.0)
    await _stored_package(test_session, price=9000.0)
    service = PackageService(test_session)

    assert await service.distinct_prices() == [9000.0, 15000.0]


@pytest.mark.asyncio
async def test_create_package_discards_thumbnail_when_gallery_upload_fails(test_session, object_store):
    """Assets from an earlier batch do not outlive a failed create."""
    service = PackageService(test_session, object_store)
    object_store.fail_filenames.add("gallery.jpg")

    with pytest.raises(UpstreamServiceError):
        await service.create(
            PackageForm(title="Goa"),
            thumbnail=[make_upload("thumb.jpg")],
            images=[make_upload("gallery.jpg")],
        )

    assert [asset.public_id for asset in object_store.uploads] == ["packages/asset1"]
    assert object_store.destroyed == ["packages/asset1"]
    assert await service.list_all() == []


@pytest.mark.asyncio
async def test_create_package_discards_thumbnail_when_gallery_is_not_an_image(test_session, object_store):
    service = PackageService(test_session, object_store)

    with pytest.raises(ValidationError):
        await service.create(
            PackageForm(title="Goa"),
            thumbnail=[make_upload("thumb.jpg")],
            images=[make_upload("notes.txt")],
        )

    assert object_store.destroyed == ["packages/asset1"]


@pytest.mark.asyncio
async def test_update_package_discards_new_uploads_when_activity_upload_fails(test_session, object_store):
    package = await _stored_package(test_session)
    service = PackageService(test_session, object_store)
    object_store.fail_filenames.add("activity.jpg")

    with pytest.raises(UpstreamServiceError):
        await service.update(
            str(package.id),
            PackageForm(),
            thumbnail=[make_upload("thumb.jpg")],
            images=[make_upload("gallery.jpg")],
            activity_images=[make_upload("activity.jpg")],
        )

    assert object_store.destroyed == ["packages/asset1", "packages/asset2"]
    await test_session.refresh(package)
    assert package.thumbnail == asset_url("packages/thumb")
    assert package.images == [asset_url("packages/g1"), asset_url("packages/g2")]


@pytest.mark.asyncio
async def test_create_package_discards_uploads_when_save_fails(test_session, object_store, monkeypatch):
    service = PackageService(test_session, object_store)

    async def failing_save(document):
        raise UpstreamServiceError(service="database", detail="Failed to save package")

    monkeypatch.setattr(service, "_save", failing_save)

    with pytest.raises(UpstreamServiceError):
        await service.create(
            PackageForm(title="Goa"),
            thumbnail=[make_upload("thumb.jpg")],
            images=[make_upload("g1.jpg"), make_upload("g2.jpg")],
        )

    assert object_store.destroyed == ["packages/asset1", "packages/asset2", "packages/asset3"]
