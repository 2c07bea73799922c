"""Team member endpoints and the org-chart view."""
from __future__ import annotations

from typing import Sequence

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from marble import crud, models
from marble.db import get_session
from marble.schemas import MessageResponse, TeamMemberOut, TeamNode
from marble.storage import save_upload

router = APIRouter(prefix="/api/team", tags=["team"])

ENTITY = "team"

NO_PARENT = {"", "none", "null"}


def parse_parent_id(value: str | None) -> tuple[bool, int | None]:
    """Read the parent_id form field.

    Returns:
        (supplied, parent_id); "none" or an empty value clears the parent
    """
    if value is None:
        return False, None
    value = value.strip()
    if value.lower() in NO_PARENT:
        return True, None
    try:
        return True, int(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=f"Invalid parent_id: {value}",
        )


def build_team_tree(members: Sequence[models.TeamMember]) -> list[TeamNode]:
    """Nest members under their parents, keeping input order among siblings.

    Members whose parent does not exist are roots. Members caught in a
    parent cycle are attached as roots once, where the cycle is entered.
    """
    by_id = {m.id: m for m in members}
    children: dict[int | None, list[models.TeamMember]] = {}
    for member in members:
        parent = member.parent_id if member.parent_id in by_id and member.parent_id != member.id else None
        children.setdefault(parent, []).append(member)

    visited: set[int] = set()

    def build(member: models.TeamMember) -> TeamNode:
        visited.add(member.id)
        node = TeamNode.model_validate(member)
        node.children = [build(child) for child in children.get(member.id, []) if child.id not in visited]
        return node

    roots = [build(member) for member in children.get(None, [])]
    for member in members:
        if member.id not in visited:
            roots.append(build(member))
    return roots


async def _ordered_members(session: AsyncSession) -> Sequence[models.TeamMember]:
    return await crud.list_rows(
        session, models.TeamMember, models.TeamMember.sort_order.asc(), models.TeamMember.id.asc()
    )


@router.get("", response_model=list[TeamMemberOut])
async def list_team(session: AsyncSession = Depends(get_session)):
    return await _ordered_members(session)


@router.get("/tree", response_model=list[TeamNode])
async def team_tree(session: AsyncSession = Depends(get_session)):
    return build_team_tree(await _ordered_members(session))


@router.get("/{member_id}", response_model=TeamMemberOut)
async def get_team_member(member_id: int, session: AsyncSession = Depends(get_session)):
    return await crud.get_or_404(session, models.TeamMember, member_id)


@router.post("", response_model=TeamMemberOut)
async def create_team_member(
    name: str = Form(...),
    position: str | None = Form(None),
    department: str | None = Form(None),
    parent_id: str | None = Form(None),
    sort_order: int = Form(0),
    image: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_session),
):
    _, parent = parse_parent_id(parent_id)
    image_path = await save_upload(image, ENTITY) if image and image.filename else None
    return await crud.create_row(
        session,
        models.TeamMember,
        {
            "name": name,
            "position": position,
            "department": department,
            "parent_id": parent,
            "sort_order": sort_order,
            "image_path": image_path,
        },
    )


@router.put("/{member_id}", response_model=TeamMemberOut)
async def update_team_member(
    member_id: int,
    name: str | None = Form(None),
    position: str | None = Form(None),
    department: str | None = Form(None),
    parent_id: str | None = Form(None),
    sort_order: int | None = Form(None),
    image_path: str | None = Form(None),
    image: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_session),
):
    member = await crud.get_or_404(session, models.TeamMember, member_id)

    supplied, parent = parse_parent_id(parent_id)
    if supplied:
        member.parent_id = parent
    if image and image.filename:
        image_path = await save_upload(image, ENTITY)

    return await crud.update_row(
        session,
        member,
        crud.sent_fields(
            name=name,
            position=position,
            department=department,
            sort_order=sort_order,
            image_path=image_path,
        ),
    )


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_team_member(member_id: int, session: AsyncSession = Depends(get_session)):
    # Members reporting to this one keep their parent_id
    await crud.delete_row(session, models.TeamMember, member_id)
    return MessageResponse(message="Team member deleted successfully")
