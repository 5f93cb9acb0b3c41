"""Tests for shaping a cluster into the identify response."""

from __future__ import annotations

import datetime as dt

import pytest

from contact_identity.errors import NotFoundInvariantViolation
from contact_identity.resolution.response import IdentifyResult, build_identify_result


def test_single_primary(make_contact):
    result = build_identify_result(
        [make_contact(1, email="lorraine@hillvalley.edu", phone_number="123456")]
    )
    assert result == IdentifyResult(
        primary_contact_id=1,
        emails=["lorraine@hillvalley.edu"],
        phone_numbers=["123456"],
        secondary_contact_ids=[],
    )


def test_primary_values_first_and_unique(make_contact):
    contacts = [
        make_contact(23, email="mcfly@hillvalley.edu", phone_number="123456", linked_id=1),
        make_contact(1, email="lorraine@hillvalley.edu", phone_number="123456"),
        make_contact(30, email="lorraine@hillvalley.edu", phone_number="717171", linked_id=1),
    ]
    result = build_identify_result(contacts)

    assert result.primary_contact_id == 1
    assert result.emails == ["lorraine@hillvalley.edu", "mcfly@hillvalley.edu"]
    assert result.phone_numbers == ["123456", "717171"]
    assert result.secondary_contact_ids == [23, 30]


def test_primary_value_leads_even_when_secondary_older(make_contact):
    contacts = [
        make_contact(5, email="old-secondary@x.io", linked_id=9, created_at=dt.datetime(2020, 1, 1)),
        make_contact(9, email="primary@x.io", phone_number="555", created_at=dt.datetime(2021, 1, 1)),
    ]
    result = build_identify_result(contacts)
    assert result.emails == ["primary@x.io", "old-secondary@x.io"]
    assert result.secondary_contact_ids == [5]


def test_nulls_dropped(make_contact):
    contacts = [
        make_contact(1, email=None, phone_number="111"),
        make_contact(2, email="b@x.io", phone_number=None, linked_id=1),
    ]
    result = build_identify_result(contacts)
    assert result.emails == ["b@x.io"]
    assert result.phone_numbers == ["111"]


def test_missing_primary_is_fatal(make_contact):
    with pytest.raises(NotFoundInvariantViolation) as exc_info:
        build_identify_result([make_contact(2, email="b@x.io", linked_id=1)])
    assert exc_info.value.code == "cluster.primary_missing"
    assert exc_info.value.status_code == 500


def test_wire_format_keeps_published_field_name():
    result = IdentifyResult(
        primary_contact_id=1,
        emails=["a@x.io"],
        phone_numbers=["111"],
        secondary_contact_ids=[2],
    )
    assert result.to_dict() == {
        "contact": {
            "primaryContatctId": 1,
            "emails": ["a@x.io"],
            "phoneNumbers": ["111"],
            "secondaryContactIds": [2],
        }
    }
