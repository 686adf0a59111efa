# controller/admin_controller.py
from fastapi import APIRouter, Depends, status
from model.api import CacheCountResponse
from service.username_seeder import UsernameSeeder
from util.constants import InternalURIs
from controller.controller_dependencies import get_username_seeder, require_admin

admin_router = APIRouter(dependencies=[Depends(require_admin)])


@admin_router.get(InternalURIs.USERNAME_CACHE, response_model=CacheCountResponse)
async def get_cache_count(
    seeder: UsernameSeeder = Depends(get_username_seeder),
) -> CacheCountResponse:
    return CacheCountResponse(count=await seeder.get_cache_count())


@admin_router.delete(InternalURIs.USERNAME_CACHE, status_code=status.HTTP_204_NO_CONTENT)
async def clear_cache(seeder: UsernameSeeder = Depends(get_username_seeder)) -> None:
    await seeder.clear_cache()


@admin_router.post(InternalURIs.USERNAME_CACHE_RESEED, response_model=CacheCountResponse)
async def reseed_cache(
    seeder: UsernameSeeder = Depends(get_username_seeder),
) -> CacheCountResponse:
    # No request deadline: a full reseed can outlast one.
    await seeder.reseed()
    return CacheCountResponse(count=await seeder.get_cache_count())
