from app.features.auth.models.user import User
from app.features.leads.models.lead_model import LeadSource, LeadStatus
from app.features.leads.schemas.lead_schema import LeadData, LeadOut
from app.features.leads.services.lead_service import LeadService


def lead_data(user_id, **overrides):
    values = dict(
        lead_text="",
        contact_name="Jane Doe",
        contact_email="jane@x.com",
        user_id=user_id,
        source=LeadSource.facebook_lead_ad,
        external_id="L1",
    )
    values.update(overrides)
    return LeadData(**values)


async def test_create_lead_persists_all_attributes(db_session, test_user):
    lead, created = await LeadService(db_session).create_lead(
        lead_data(test_user.id, contact_phone="+15550100", lead_text="budget: 500")
    )

    assert created is True
    assert lead.id
    assert lead.user_id == test_user.id
    assert lead.status is LeadStatus.new
    assert lead.contact_phone == "+15550100"
    assert lead.lead_text == "budget: 500"


async def test_same_external_id_returns_existing_lead(db_session, test_user):
    service = LeadService(db_session)

    first, first_created = await service.create_lead(lead_data(test_user.id))
    second, second_created = await service.create_lead(lead_data(test_user.id, contact_name="Someone Else"))

    assert first_created is True
    assert second_created is False
    assert second.id == first.id
    assert second.contact_name == "Jane Doe"


async def test_same_external_id_on_another_source_is_a_new_lead(db_session, test_user):
    service = LeadService(db_session)

    await service.create_lead(lead_data(test_user.id))
    _, created = await service.create_lead(lead_data(test_user.id, source=LeadSource.messenger))

    assert created is True


async def test_leads_without_external_id_are_never_deduplicated(db_session, test_user):
    service = LeadService(db_session)

    await service.create_lead(lead_data(test_user.id, source=LeadSource.manual, external_id=None))
    await service.create_lead(lead_data(test_user.id, source=LeadSource.manual, external_id=None))

    assert len(await service.list_leads_for_user(test_user.id)) == 2


async def test_list_is_scoped_to_owner(db_session, test_user):
    other = User(email="other@example.com", username="other", is_email_verified=True)
    db_session.add(other)
    await db_session.commit()

    service = LeadService(db_session)
    await service.create_lead(lead_data(test_user.id, external_id="L1"))
    await service.create_lead(lead_data(test_user.id, external_id="L2"))
    await service.create_lead(lead_data(other.id, external_id="L3"))

    mine = await service.list_leads_for_user(test_user.id)

    assert sorted(lead.external_id for lead in mine) == ["L1", "L2"]


async def test_stored_lead_serializes_from_attributes(db_session, test_user):
    lead, _ = await LeadService(db_session).create_lead(lead_data(test_user.id))

    out = LeadOut.model_validate(lead)

    assert out.id == lead.id
    assert out.source is LeadSource.facebook_lead_ad
    assert out.external_id == "L1"
    assert out.contact_phone == ""
