from fastapi import APIRouter

from questionnaire.api.v1.endpoints import questionnaires

api_v1_router = APIRouter()

api_v1_router.include_router(questionnaires.router, prefix="/questionnaires", tags=["questionnaires"])
