"""GuidanceDAL create / read / update against a temporary SQLite database."""

import pytest

from dal.guidance_dal import GuidanceDAL
from models.guidance_records import (
    Application,
    CareerProfile,
    Document,
    Profile,
    ResearchInterest,
    VisaApplication,
)
from utils.database_init import AsyncDatabaseInitializer


@pytest.fixture
def dal(database_env):
    return GuidanceDAL(AsyncDatabaseInitializer())


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(dal):
    profile = await dal.create(Profile(id=None, user_id=1, gpa="3.8", toefl_score=105, budget=30000))

    assert profile.id is not None
    assert profile.created_at is not None
    assert profile.updated_at is not None
    assert await dal.get_by_id(Profile, profile.id) == profile


@pytest.mark.asyncio
async def test_get_by_user_id_returns_first_record_or_none(dal):
    first = await dal.create(
        VisaApplication(id=None, user_id=7, nationality="Nigeria", destination_country="USA", program_type="MS")
    )
    await dal.create(
        VisaApplication(id=None, user_id=7, nationality="Nigeria", destination_country="Canada", program_type="MS")
    )

    assert await dal.get_by_user_id(VisaApplication, 7) == first
    assert await dal.get_by_user_id(VisaApplication, 8) is None


@pytest.mark.asyncio
async def test_json_fields_round_trip(dal):
    await dal.create(
        ResearchInterest(
            id=None, user_id=1, primary_area="NLP", preferred_universities=["MIT", "Stanford"]
        )
    )

    stored = await dal.get_by_user_id(ResearchInterest, 1)

    assert stored.preferred_universities == ["MIT", "Stanford"]


@pytest.mark.asyncio
async def test_list_by_user_id_keeps_insertion_order(dal):
    for doc_type in ("SOP", "CV"):
        await dal.create(
            Document(id=None, user_id=3, document_type=doc_type, original_content="text", suggestions=["a"])
        )

    documents = await dal.list_by_user_id(Document, 3)

    assert [d.document_type for d in documents] == ["SOP", "CV"]
    assert documents[0].suggestions == ["a"]


@pytest.mark.asyncio
async def test_update_merges_partial_changes(dal):
    profile = await dal.create(Profile(id=None, user_id=1, gpa="3.2", field_of_study="CS"))

    updated = await dal.update(Profile, profile.id, gpa="3.6", strength_score=80)

    assert updated.gpa == "3.6"
    assert updated.strength_score == 80
    assert updated.field_of_study == "CS"


@pytest.mark.asyncio
async def test_update_encodes_structured_values(dal):
    career = await dal.create(CareerProfile(id=None, user_id=1, field_of_study="Data Science"))

    updated = await dal.update(CareerProfile, career.id, career_paths=["Analyst"], immigration_info={"OPT": True})

    assert updated.career_paths == ["Analyst"]
    assert updated.immigration_info == '{"OPT": true}'


@pytest.mark.asyncio
async def test_update_missing_row_raises_lookup_error(dal):
    with pytest.raises(LookupError):
        await dal.update(Profile, 999, gpa="4.0")


@pytest.mark.asyncio
async def test_update_rejects_unknown_fields(dal):
    profile = await dal.create(Profile(id=None, user_id=1))
    with pytest.raises(ValueError):
        await dal.update(Profile, profile.id, favourite_color="blue")


@pytest.mark.asyncio
async def test_replace_university_matches_overwrites_previous(dal):
    profile = await dal.create(Profile(id=None, user_id=1))
    await dal.replace_university_matches(profile.id, [{"name": "Old U", "program": "CS", "cost": 1, "matchScore": 1}])

    stored = await dal.replace_university_matches(
        profile.id,
        [
            {"name": "University A", "program": "CS", "cost": 28000, "matchScore": 90},
            "not a match",
        ],
    )

    assert [m.university_name for m in stored] == ["University A"]
    assert [m.university_name for m in await dal.get_university_matches(profile.id)] == ["University A"]


@pytest.mark.asyncio
async def test_professor_matches_are_scoped_to_interest(dal):
    first = await dal.create(ResearchInterest(id=None, user_id=1, primary_area="NLP"))
    second = await dal.create(ResearchInterest(id=None, user_id=2, primary_area="Vision"))
    await dal.replace_professor_matches(first.id, [{"name": "Prof. Smith", "university": "A", "matchScore": 95}])

    assert [m.professor_name for m in await dal.get_professor_matches(first.id)] == ["Prof. Smith"]
    assert await dal.get_professor_matches(second.id) == []


@pytest.mark.asyncio
async def test_application_defaults_and_status_update(dal):
    created = await dal.create(
        Application(
            id=None,
            user_id=1,
            university="University of Toronto",
            program="Computer Science",
            deadline="2025-11-15",
            documents=["Transcript", "SOP"],
        )
    )

    assert created.status == "not-started"

    updated = await dal.update(Application, created.id, status="submitted")

    assert updated.status == "submitted"
    assert updated.documents == ["Transcript", "SOP"]
    assert await dal.list_by_user_id(Application, 1) == [updated]


def test_missing_database_dir_is_rejected(monkeypatch):
    monkeypatch.delenv("DATABASE_DIR", raising=False)
    with pytest.raises(RuntimeError):
        AsyncDatabaseInitializer()
