from middleware.request_lifecycle import RequestLifecycleMiddleware
from middleware.error_handlers import register_exception_handlers
