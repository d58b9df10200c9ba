"""Static generation params for the site build."""

import anyio
from fastapi import APIRouter

from ..dependencies import PlannerDep
from ..schemas import CategoryParam, TopicParam


router = APIRouter()


@router.get("/categories", response_model=list[CategoryParam])
async def category_params(planner: PlannerDep):
    """Params for every category page; empty if the content tree is unreadable."""
    return await anyio.to_thread.run_sync(planner.category_params)


@router.get("/topics", response_model=list[TopicParam])
async def topic_params(planner: PlannerDep):
    """Params for every topic page; empty if the content tree is unreadable."""
    return await anyio.to_thread.run_sync(planner.topic_params)
