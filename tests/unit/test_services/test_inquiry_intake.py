"""Tests for contact form intake."""

import pytest

from primehomes.models.inquiry import InquiryInput, InquiryStatus
from primehomes.services.backend import Collection
from primehomes.services.inquiries import submit_inquiry
from primehomes.utils.errors import SupabaseError


@pytest.mark.unit
@pytest.mark.asyncio
async def test_submit_listing_inquiry(fake_backend):
    data = InquiryInput(
        name="Thoko Phiri",
        email=" Thoko@Example.com ",
        phone="+265 999 123 456",
        message="Is the villa still available?",
        property_id="lake-view",
    )

    inquiry = await submit_inquiry(fake_backend, data)

    assert inquiry.status == InquiryStatus.NEW
    assert inquiry.property_id == "lake-view"
    assert inquiry.email == "thoko@example.com"
    stored = fake_backend.rows(Collection.INQUIRIES)
    assert len(stored) == 1
    assert stored[0]["status"] == "new"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_submit_general_inquiry(fake_backend):
    data = InquiryInput(name="Thoko", email="thoko@example.com", message="Do you manage rentals?", property_id="")

    inquiry = await submit_inquiry(fake_backend, data)

    assert inquiry.is_general
    assert fake_backend.rows(Collection.INQUIRIES)[0]["property_id"] is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_submit_inquiry_propagates_collaborator_errors(fake_backend):
    fake_backend.fail_on.add("insert")
    data = InquiryInput(name="Thoko", email="thoko@example.com", message="Hello")

    with pytest.raises(SupabaseError):
        await submit_inquiry(fake_backend, data)

    assert fake_backend.rows(Collection.INQUIRIES) == []
