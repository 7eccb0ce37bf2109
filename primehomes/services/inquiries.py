"""Public contact form intake."""

from primehomes.models.inquiry import Inquiry, InquiryInput
from primehomes.services.backend import CatalogBackend, Collection
from primehomes.utils.logging import get_structured_logger, mask_email, timed

logger = get_structured_logger(__name__)


@timed("submit_inquiry", logger=logger)
async def submit_inquiry(backend: CatalogBackend, data: InquiryInput) -> Inquiry:
    """Store a lead with triage status ``new``. Collaborator errors propagate."""
    rows = await backend.insert(Collection.INQUIRIES, [data.to_record()])
    inquiry = Inquiry.model_validate(rows[0])
    logger.info(
        "Inquiry received",
        inquiry_id=inquiry.id,
        property_id=inquiry.property_id,
        sender_email=mask_email(inquiry.email),
    )
    return inquiry
