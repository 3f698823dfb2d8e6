# Global Constants

class Roles:
    ADMIN = "admin"


class Collections:
    USERS = "users"
    SERVICES = "services"
    PROJECTS = "projects"
    BLOGS = "blogs"
    TEAM_MEMBERS = "teamMembers"
    TESTIMONIALS = "testimonials"
    CONTACTS = "contacts"
    REPLIES = "replies"
    MEDIA = "media"
    VISITORS = "visitors"
    PAGE_VIEWS = "pageViews"


class ContactStatus:
    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    SPAM = "spam"

    ALL = (NEW, READ, REPLIED, SPAM)


class BlogStatus:
    DRAFT = "Draft"
    PUBLISHED = "Published"


class ReplyMethod:
    EMAIL_CLIENT = "email_client"
    QUICK_REPLY = "quick_reply"
    EMAIL_RECEIVED = "email_received"


class MediaTypes:
    IMAGE = "Image"
    DOCUMENT = "Document"
    VIDEO = "Video"
    AUDIO = "Audio"


class ErrorCodes:
    NO_TOKEN = "NO_TOKEN"
    INVALID_TOKEN_FORMAT = "INVALID_TOKEN_FORMAT"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INSUFFICIENT_PRIVILEGES = "INSUFFICIENT_PRIVILEGES"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
