from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from src.application.services.farm_data_provider import FarmDataProvider
from src.application.use_cases.genealogy import save_genealogy
from src.domain.models.genealogy import KINSHIP_FIELDS, Genealogy, Kinship
from src.domain.services.pedigree import PedigreeMember
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_auth_context, get_provider
from src.interfaces.http.schemas.genealogy import (
    GenealogyResponse,
    GenealogyUpdate,
    PedigreeMemberResponse,
)

router = APIRouter(prefix="/genealogy", tags=["genealogy"])


def _to_response(
    animal_id: UUID, genealogy: Genealogy | None, members: dict[Kinship, PedigreeMember]
) -> GenealogyResponse:
    ids = {
        attr: getattr(genealogy, attr) if genealogy else None
        for attr in KINSHIP_FIELDS.values()
    }
    return GenealogyResponse(
        animal_id=animal_id,
        members=[
            PedigreeMemberResponse(
                kinship=m.kinship, animal_id=m.animal_id, tag=m.tag, name=m.name, label=m.label
            )
            for m in members.values()
        ],
        updated_by=genealogy.updated_by if genealogy else None,
        updated_at=genealogy.updated_at if genealogy else None,
        **ids,
    )


@router.get("/{animal_id}", response_model=GenealogyResponse)
async def read_genealogy(
    animal_id: UUID, provider: FarmDataProvider = Depends(get_provider)
) -> GenealogyResponse:
    """Pedigree with tags resolved; an animal without one returns empty slots."""
    genealogy, members = provider.pedigree(animal_id)
    return _to_response(animal_id, genealogy, members)


@router.put("/{animal_id}", response_model=GenealogyResponse)
async def save_genealogy_endpoint(
    animal_id: UUID,
    payload: GenealogyUpdate,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> GenealogyResponse:
    await provider.save_genealogy(
        context.role,
        animal_id,
        save_genealogy.SaveGenealogyInput(**payload.model_dump()),
        actor=context.actor_label,
    )
    genealogy, members = provider.pedigree(animal_id)
    return _to_response(animal_id, genealogy, members)


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_genealogy_endpoint(
    animal_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    provider: FarmDataProvider = Depends(get_provider),
) -> Response:
    await provider.delete_genealogy(context.role, animal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
