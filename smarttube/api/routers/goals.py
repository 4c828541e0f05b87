from __future__ import annotations

from fastapi import APIRouter, Depends

from smarttube.api.deps import (
    get_complete_goal_use_case,
    get_create_goal_use_case,
    get_current_user,
    get_delete_goal_use_case,
    get_list_goals_use_case,
    get_update_goal_progress_use_case,
)
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.auth import OkResponse
from smarttube.api.schemas.goals import (
    CreateGoalRequest,
    GoalResponse,
    GoalsOverviewResponse,
    UpdateGoalProgressRequest,
)
from smarttube.application.dto.goals import CreateGoalInput, UpdateGoalProgressInput
from smarttube.application.use_cases.channel_goals import (
    CompleteGoalUseCase,
    CreateGoalUseCase,
    DeleteGoalUseCase,
    ListGoalsUseCase,
    UpdateGoalProgressUseCase,
)
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import DomainError


router = APIRouter()


@router.get("/v1/goals", response_model=GoalsOverviewResponse)
def list_goals(
    current_user: User = Depends(get_current_user),
    use_case: ListGoalsUseCase = Depends(get_list_goals_use_case),
):
    return GoalsOverviewResponse.model_validate(use_case.execute(user_id=current_user.id))


@router.post("/v1/goals", response_model=GoalResponse, status_code=201)
def create_goal(
    req: CreateGoalRequest,
    current_user: User = Depends(get_current_user),
    use_case: CreateGoalUseCase = Depends(get_create_goal_use_case),
):
    try:
        goal = use_case.execute(
            CreateGoalInput(
                user_id=current_user.id,
                title=req.title,
                category=req.category,
                target_value=req.target_value,
                deadline=req.deadline,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return GoalResponse.model_validate(goal)


@router.patch("/v1/goals/{goal_id}/progress", response_model=GoalResponse)
def update_goal_progress(
    goal_id: str,
    req: UpdateGoalProgressRequest,
    current_user: User = Depends(get_current_user),
    use_case: UpdateGoalProgressUseCase = Depends(get_update_goal_progress_use_case),
):
    try:
        goal = use_case.execute(
            UpdateGoalProgressInput(user_id=current_user.id, goal_id=goal_id, progress=req.progress)
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return GoalResponse.model_validate(goal)


@router.post("/v1/goals/{goal_id}/complete", response_model=GoalResponse)
def complete_goal(
    goal_id: str,
    current_user: User = Depends(get_current_user),
    use_case: CompleteGoalUseCase = Depends(get_complete_goal_use_case),
):
    try:
        goal = use_case.execute(user_id=current_user.id, goal_id=goal_id)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return GoalResponse.model_validate(goal)


@router.delete("/v1/goals/{goal_id}", response_model=OkResponse)
def delete_goal(
    goal_id: str,
    current_user: User = Depends(get_current_user),
    use_case: DeleteGoalUseCase = Depends(get_delete_goal_use_case),
):
    try:
        use_case.execute(user_id=current_user.id, goal_id=goal_id)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return OkResponse(ok=True)
