from fastapi import APIRouter, BackgroundTasks, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from datetime import datetime
import re
from models.contact import ContactCreate, ContactStatusUpdate, ReplyCreate, EmailWebhookPayload
from repository import Repository, parse_mongo_data, to_object_id
from middleware.error_handlers import NotFoundError, ValidationFailed
from routes.deps import get_db, require_admin
from constants import Collections, ContactStatus, ReplyMethod
from utils.email import send_contact_reply_email
from logging_config import get_logger
from config import config

router = APIRouter(prefix="/api/contacts", tags=["Contacts"])
logger = get_logger("contacts")

TRACKING_PATTERN = re.compile(r"\[TRACK_([a-f0-9]+)_(\d+)\]")


def get_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> Repository:
    return Repository(
        db,
        Collections.CONTACTS,
        list_key="contacts",
        search_fields=("name", "email", "subject", "message"),
        default_sort=[("createdAt", -1)],
        label="Contact",
    )


def make_tracking_id(contact_id: str, at: datetime) -> str:
    return f"TRACK_{contact_id}_{int(at.timestamp() * 1000)}"


async def status_counts(repo: Repository) -> dict:
    counts = {"total": await repo.count()}
    for status in ContactStatus.ALL:
        counts[status] = await repo.count({"status": status})
    return counts


# --- PUBLIC ---

@router.post("")
async def create_contact(contact: ContactCreate, repo: Repository = Depends(get_repo)):
    """CREATE: contact form submission, returns the stored row"""
    doc = contact.model_dump(exclude_none=True)
    doc.update({"status": ContactStatus.NEW, "readAt": None, "repliedAt": None})
    result, _ = await repo.create(doc)
    logger.info("Contact received", extra={"data": {"id": str(result.inserted_id), "email": contact.email}})
    return await repo.get(str(result.inserted_id))


@router.post("/email-webhook")
async def email_webhook(payload: EmailWebhookPayload, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Inbound reply from the mail provider. The contact is found through the
    [TRACK_<contactId>_<millis>] marker our outgoing subject lines carry.
    """
    match = TRACKING_PATTERN.search(payload.subject or "")
    if not match:
        logger.warning("Email webhook without tracking id", extra={"data": {"subject": payload.subject}})
        raise ValidationFailed("No tracking ID found")

    contact_id, timestamp = match.group(1), match.group(2)
    oid = to_object_id(contact_id)
    contact = await db[Collections.CONTACTS].find_one({"_id": oid}) if oid else None
    if not contact:
        logger.warning("Email webhook for unknown contact", extra={"data": {"contact_id": contact_id}})
        raise NotFoundError("Contact not found")

    now = datetime.now()
    await db[Collections.REPLIES].insert_one({
        "contactId": contact_id,
        "fromEmail": payload.from_,
        "toEmail": payload.to,
        "subject": payload.subject,
        "message": payload.text or payload.html,
        "receivedAt": now,
        "messageId": payload.messageId,
        "inReplyTo": payload.inReplyTo,
        "references": payload.references,
        "trackingId": f"TRACK_{contact_id}_{timestamp}",
        "method": ReplyMethod.EMAIL_RECEIVED,
        "status": "received",
    })

    await db[Collections.CONTACTS].update_one(
        {"_id": oid},
        {"$set": {
            "status": ContactStatus.REPLIED,
            "repliedAt": now,
            "lastEmailReply": {
                "from": payload.from_,
                "subject": payload.subject,
                "receivedAt": now,
                "messageId": payload.messageId,
            },
            "updatedAt": now,
        }}
    )

    logger.info("Inbound email reply stored", extra={"data": {"contact_id": contact_id}})
    return {"success": True, "message": "Email reply processed"}


# --- ADMIN ---

@router.get("")
async def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query(None, description="Search name, email, subject or message"),
    status: str = Query(None, description="new, read, replied, spam or all"),
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    filters = {}
    if status and status != "all":
        filters["status"] = status

    result = await repo.list_page(filters, search, page, limit)
    result["stats"] = await status_counts(repo)
    return result


@router.get("/stats")
async def get_contact_stats(repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    return await status_counts(repo)


@router.get("/{id}")
async def get_contact(id: str, repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    return await repo.get(id)


@router.put("/{id}/status")
async def update_contact_status(
    id: str,
    body: ContactStatusUpdate,
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    """
    UPDATE STATUS: replied always stamps repliedAt; readAt is stamped only
    the first time a contact becomes read.
    """
    now = datetime.now()
    fields = {"status": body.status}
    if body.status == ContactStatus.REPLIED:
        fields["repliedAt"] = now
    await repo.update(id, fields)

    if body.status == ContactStatus.READ:
        # readAt: None matches both null and missing
        await repo.collection.update_one({"_id": repo.object_id(id), "readAt": None}, {"$set": {"readAt": now}})

    logger.info("Contact status changed", extra={"data": {"id": id, "status": body.status}})
    return await repo.get(id)


@router.delete("/{id}")
async def delete_contact(id: str, repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    await repo.delete(id)
    logger.info("Contact deleted", extra={"data": {"id": id}})
    return {"message": "Contact deleted successfully"}


@router.post("/{id}/reply")
async def reply_to_contact(
    id: str,
    body: ReplyCreate,
    background_tasks: BackgroundTasks,
    repo: Repository = Depends(get_repo),
    db: AsyncIOMotorDatabase = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """
    Records an outgoing reply and marks the contact replied.
    Without a client tracking id the reply is a quick reply and is mailed
    from here; otherwise the admin sent it from their own mail client.
    """
    contact = await repo.get(id)

    now = datetime.now()
    admin_email = body.adminEmail or config.DEFAULT_ADMIN_EMAIL
    tracking_id = body.trackingId or make_tracking_id(id, now)
    method = ReplyMethod.EMAIL_CLIENT if body.trackingId else ReplyMethod.QUICK_REPLY

    reply = {
        "contactId": id,
        "adminEmail": admin_email,
        "replyMessage": body.message,
        "sentAt": now,
        "recipientEmail": contact.get("email"),
        "recipientName": contact.get("name"),
        "originalSubject": contact.get("subject"),
        "trackingId": tracking_id,
        "method": method,
        "status": "sent",
    }
    await db[Collections.REPLIES].insert_one(reply)

    await repo.update(id, {
        "status": ContactStatus.REPLIED,
        "repliedAt": now,
        "lastReply": {
            "message": body.message,
            "sentAt": now,
            "adminEmail": admin_email,
            "trackingId": tracking_id,
            "method": method,
        },
    })

    if method == ReplyMethod.QUICK_REPLY and contact.get("email"):
        background_tasks.add_task(
            send_contact_reply_email,
            to_email=contact["email"],
            recipient_name=contact.get("name"),
            original_subject=contact.get("subject"),
            message=body.message,
            tracking_id=tracking_id,
            reply_to=admin_email,
            original_message=contact.get("message"),
        )

    logger.info("Reply tracked", extra={"data": {"contact_id": id, "tracking_id": tracking_id, "method": method}})

    reply_data = parse_mongo_data({k: v for k, v in reply.items() if k != "adminEmail"})
    return {
        "success": True,
        "message": "Reply tracked successfully",
        "trackingId": tracking_id,
        "replyData": reply_data,
    }


@router.get("/{id}/replies")
async def list_replies(id: str, db: AsyncIOMotorDatabase = Depends(get_db), _admin: dict = Depends(require_admin)):
    """Outbound and inbound replies for one contact, newest first."""
    replies = await db[Collections.REPLIES].find({"contactId": id}).to_list(length=None)
    # Outbound rows carry sentAt, inbound rows receivedAt; order on whichever is set
    replies.sort(key=lambda r: (r.get("sentAt") or r.get("receivedAt") or datetime.min, r["_id"]), reverse=True)
    return parse_mongo_data(replies)
