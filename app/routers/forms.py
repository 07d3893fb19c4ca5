from fastapi import APIRouter, Depends

from app.deps import get_completion_service
from app.models.job import CompletionFormResult, CompletionFormSubmission, CompletionJobView
from app.services.completion import CompletionFormService

# Sin auth de operador: el token del path es la credencial
router = APIRouter()


@router.get("/forms/job/{token}", response_model=CompletionJobView)
def get_completion_job(token: str, forms: CompletionFormService = Depends(get_completion_service)):
    """Job details a tech needs on site"""
    return forms.get_job(token)


@router.post("/forms/job/{token}", response_model=CompletionFormResult)
def submit_completion_form(
    token: str,
    body: CompletionFormSubmission,
    forms: CompletionFormService = Depends(get_completion_service),
):
    forms.submit(token, body)
    return CompletionFormResult(success=True, message="Completion form submitted successfully")
