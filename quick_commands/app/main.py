from fastapi import FastAPI, HTTPException, Depends, status
from fastapi.responses import Response

from .dependencies import get_wizard_service
from ..domain.models import DirectiveItem, Step
from ..execution.schemas.state_machine import AwaitingSelection, Cancelled, StepOutcome, WizardPhase
from ..repositories.git import GitCommandError
from ..services.exceptions import (
    InvalidSelectionError,
    UnknownCommandError,
    UnknownRepositoryError,
    WizardNotFoundError,
)
from ..services.wizard import WizardService
from .schemas import (
    ItemView,
    SelectionRequest,
    StartWizardRequest,
    StepView,
    WizardResponse,
)

app = FastAPI(title="Git Quick Commands")

# --- Endpoints ---

@app.post(
    "/wizards",
    response_model=WizardResponse,
    status_code=status.HTTP_201_CREATED
)
async def start_wizard(
    request: StartWizardRequest,
    service: WizardService = Depends(get_wizard_service)
):
    """Starts a wizard and returns its first step."""
    try:
        session_id, outcome = await service.start(
            request.command,
            repository_ids=request.repositories,
            flags=request.flags,
            confirm=request.confirm,
        )
    except UnknownCommandError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnknownRepositoryError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GitCommandError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return _to_response(session_id, outcome)


@app.get("/wizards/{session_id}", response_model=WizardResponse)
def get_wizard(
    session_id: str,
    service: WizardService = Depends(get_wizard_service)
):
    """Returns the step a running wizard is waiting on."""
    try:
        sequencer = service.get(session_id)
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    # Terminated wizards are already gone; anything else between steps is running
    awaiting = sequencer.step is not None and sequencer.phase in (
        WizardPhase.SELECT_ENTITIES,
        WizardPhase.CONFIRM,
    )
    return WizardResponse(
        session_id=session_id,
        status="AWAITING_SELECTION" if awaiting else "RUNNING",
        step=_step_view(sequencer.phase, sequencer.step) if awaiting else None,
    )


@app.post("/wizards/{session_id}/selection", response_model=WizardResponse)
async def answer_step(
    session_id: str,
    selection: SelectionRequest,
    service: WizardService = Depends(get_wizard_service)
):
    try:
        outcome = await service.respond(
            session_id, indexes=selection.items, back=selection.back
        )
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidSelectionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GitCommandError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return _to_response(session_id, outcome)


@app.delete("/wizards/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_wizard(
    session_id: str,
    service: WizardService = Depends(get_wizard_service)
):
    """
    Discards a running wizard. Returns 204 No Content on success.
    """
    if not service.cancel(session_id):
        raise HTTPException(status_code=404, detail="Wizard not found")

    # For 204, we must explicitly return a Response object with no content
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Mapping ---

def _to_response(session_id: str, outcome: StepOutcome) -> WizardResponse:
    if isinstance(outcome, AwaitingSelection):
        return WizardResponse(
            session_id=session_id,
            status="AWAITING_SELECTION",
            step=_step_view(outcome.phase, outcome.step),
        )
    if isinstance(outcome, Cancelled):
        return WizardResponse(
            session_id=session_id, status="CANCELLED", reason=outcome.reason
        )

    final_state = outcome.state
    return WizardResponse(
        session_id=session_id,
        status="COMPLETED",
        repositories=[r.id for r in final_state.entities or []],
        flags=list(final_state.flags or []),
    )


def _step_view(phase: WizardPhase, step: Step) -> StepView:
    items = []
    for index, item in enumerate(step.items):
        if isinstance(item, DirectiveItem):
            items.append(
                ItemView(
                    index=index,
                    label=item.label,
                    detail=item.detail,
                    directive=item.directive.value,
                )
            )
        else:
            items.append(
                ItemView(
                    index=index,
                    label=item.label,
                    description=item.description,
                    detail=item.detail,
                    picked=item.picked,
                )
            )

    return StepView(
        kind=step.kind,
        phase=phase.name,
        title=step.title,
        placeholder=step.placeholder,
        multiselect=step.multiselect,
        items=items,
    )
