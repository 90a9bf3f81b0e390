from .attendance import router as attendance_router
from .certificate import router as certificate_router
from .gamification import router as gamification_router
from .quiz import router as quiz_router

routes = [
    quiz_router,
    gamification_router,
    certificate_router,
    attendance_router,
]
