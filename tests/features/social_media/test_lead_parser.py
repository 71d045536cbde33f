from app.features.leads.models.lead_model import LeadSource, LeadStatus
from app.features.social_media.utils.lead_parser import parse_lead_data, parse_message_data


def test_maps_standard_form_fields():
    lead = parse_lead_data(
        {"full_name": "Jane Doe", "email": "jane@x.com", "phone_number": "+15550100"},
        user_id="user-1",
        external_id="L1",
    )

    assert lead.contact_name == "Jane Doe"
    assert lead.contact_email == "jane@x.com"
    assert lead.contact_phone == "+15550100"
    assert lead.user_id == "user-1"
    assert lead.external_id == "L1"
    assert lead.source is LeadSource.facebook_lead_ad
    assert lead.status is LeadStatus.new


def test_missing_fields_default_to_empty_string():
    lead = parse_lead_data({"full_name": "Jane Doe", "email": "jane@x.com"}, user_id="user-1")

    assert lead.contact_phone == ""
    assert lead.lead_text == ""


def test_name_falls_back_to_first_and_last():
    lead = parse_lead_data({"first_name": "Jane", "last_name": "Doe"}, user_id="user-1")
    assert lead.contact_name == "Jane Doe"


def test_unmapped_answers_become_lead_text():
    lead = parse_lead_data(
        {
            "full_name": "Jane Doe",
            "what_are_you_looking_for?": "Wedding cake",
            "budget": "500",
            "empty_question": "  ",
        },
        user_id="user-1",
    )
    assert lead.lead_text == "what_are_you_looking_for?: Wedding cake\nbudget: 500"


def test_message_maps_sender_and_text():
    lead = parse_message_data(
        {"id": "m1", "message": "Do you deliver?", "from": {"id": "U1", "name": "Sam Lee"}},
        user_id="user-1",
        external_id="m1",
    )
    assert lead.lead_text == "Do you deliver?"
    assert lead.contact_name == "Sam Lee"
    assert lead.contact_email == ""
    assert lead.contact_phone == ""
    assert lead.source is LeadSource.messenger
