import pytest

from ewave.services.catalog_service import CatalogService, build_search_statement, parse_filters
from ewave.services.exceptions import NotFoundError


def names(vehicles):
    return {v.model_name for v in vehicles}


def test_parse_filters_strips_and_drops_empty_entries():
    assert parse_filters(None) == []
    assert parse_filters("") == []
    assert parse_filters("sedan, electric,") == ["sedan", "electric"]
    assert parse_filters("sedan,sedan,suv") == ["sedan", "suv"]


def test_search_statement_binds_user_input():
    stmt = build_search_statement("x'; DROP TABLE vehicles; --", ["sedan"])
    compiled = str(stmt)

    assert "DROP TABLE" not in compiled
    assert "sedan" not in compiled


@pytest.mark.asyncio
async def test_empty_search_returns_whole_catalog(async_db_session, catalog):
    results = await CatalogService(async_db_session).search_core(None, [])

    assert names(results) == set(catalog)
    assert [v.vehicle_id for v in results] == sorted(v.vehicle_id for v in results)


@pytest.mark.asyncio
async def test_term_search_matches_name_description_and_excludes_sold_out(async_db_session, catalog):
    results = await CatalogService(async_db_session).search_core("tesla", [])

    # Roadster matches by name but is sold out; Accord matches through its description
    assert names(results) == {"Tesla Model 3", "Honda Accord"}
    assert all(v.availability > 0 for v in results)


@pytest.mark.asyncio
async def test_term_search_is_case_insensitive_and_matches_tags(async_db_session, catalog):
    svc = CatalogService(async_db_session)

    assert names(await svc.search_core("TESLA", [])) == {"Tesla Model 3", "Honda Accord"}
    assert names(await svc.search_core("hatchback", [])) == {"Chevrolet Bolt"}


@pytest.mark.asyncio
async def test_tag_filters_require_all_tags_and_keep_sold_out(async_db_session, catalog):
    results = await CatalogService(async_db_session).search_core(None, ["sedan", "electric"])

    # Ioniq 6 is sold out but tag-only filtering does not look at availability
    assert names(results) == {"Tesla Model 3", "Hyundai Ioniq 6"}


@pytest.mark.asyncio
async def test_term_and_tags_are_combined_with_and(async_db_session, catalog):
    results = await CatalogService(async_db_session).search_core("tesla", ["electric"])

    assert names(results) == {"Tesla Model 3"}


@pytest.mark.asyncio
async def test_no_match_raises_not_found(async_db_session, catalog):
    svc = CatalogService(async_db_session)

    with pytest.raises(NotFoundError):
        await svc.search_core("lamborghini", [])

    # LIKE wildcards in input are matched literally
    with pytest.raises(NotFoundError):
        await svc.search_core("%", [])


@pytest.mark.asyncio
async def test_empty_catalog_raises_not_found(async_db_session):
    with pytest.raises(NotFoundError):
        await CatalogService(async_db_session).search_core("", [])


@pytest.mark.asyncio
async def test_get_vehicle_core(async_db_session, catalog):
    svc = CatalogService(async_db_session)
    bolt = catalog["Chevrolet Bolt"]

    found = await svc.get_vehicle_core(bolt.vehicle_id)
    assert found.model_name == "Chevrolet Bolt"
    assert found.primary_category == "hatchback"

    with pytest.raises(NotFoundError, match="Vehicle not found"):
        await svc.get_vehicle_core(9999)
