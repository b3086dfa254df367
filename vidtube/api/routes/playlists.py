"""
VidTube API — playlist routes.

  POST   /playlists
  GET    /playlists/user/{user_id}
  GET    /playlists/{playlist_id}
  PATCH  /playlists/{playlist_id}
  DELETE /playlists/{playlist_id}
  PATCH  /playlists/add/{video_id}/{playlist_id}
  PATCH  /playlists/remove/{video_id}/{playlist_id}
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from vidtube.api.deps import get_playlist_service, get_relationship_service
from vidtube.core.auth import get_current_actor
from vidtube.core.errors import parse_id
from vidtube.core.responses import api_response
from vidtube.schemas.schemas import PlaylistCreate
from vidtube.services.playlists.playlist_service import PlaylistService
from vidtube.services.resolver.relationship_service import RelationshipService

router = APIRouter(prefix="/playlists", tags=["playlists"])


@router.post("")
async def create_playlist(
    body: PlaylistCreate,
    actor_id: uuid.UUID = Depends(get_current_actor),
    playlists: PlaylistService = Depends(get_playlist_service),
):
    playlist = await playlists.create(actor_id, body.name, body.description)
    return api_response(playlist, "Playlist created successfully", status_code=201)


@router.get("/user/{user_id}")
async def user_playlists(
    user_id: str,
    resolver: RelationshipService = Depends(get_relationship_service),
):
    groups = await resolver.user_playlists(parse_id(user_id, "user id"))
    return api_response(groups, "Playlists fetched successfully")


@router.get("/{playlist_id}")
async def get_playlist(
    playlist_id: str,
    playlists: PlaylistService = Depends(get_playlist_service),
):
    playlist = await playlists.get(parse_id(playlist_id, "playlist id"))
    return api_response(playlist, "Playlist fetched successfully")


@router.patch("/{playlist_id}")
async def update_playlist(
    playlist_id: str,
    body: PlaylistCreate,
    actor_id: uuid.UUID = Depends(get_current_actor),
    playlists: PlaylistService = Depends(get_playlist_service),
):
    playlist = await playlists.update(parse_id(playlist_id, "playlist id"), actor_id, body.name, body.description)
    return api_response(playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}")
async def delete_playlist(
    playlist_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    playlists: PlaylistService = Depends(get_playlist_service),
):
    playlist = await playlists.delete(parse_id(playlist_id, "playlist id"), actor_id)
    return api_response(playlist, "Playlist deleted successfully")


@router.patch("/add/{video_id}/{playlist_id}")
async def add_video(
    video_id: str,
    playlist_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    playlists: PlaylistService = Depends(get_playlist_service),
):
    playlist = await playlists.add_video(
        parse_id(playlist_id, "playlist id"), parse_id(video_id, "video id"), actor_id
    )
    return api_response(playlist, "Video added to playlist successfully")


@router.patch("/remove/{video_id}/{playlist_id}")
async def remove_video(
    video_id: str,
    playlist_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    playlists: PlaylistService = Depends(get_playlist_service),
):
    playlist = await playlists.remove_video(
        parse_id(playlist_id, "playlist id"), parse_id(video_id, "video id"), actor_id
    )
    return api_response(playlist, "Video removed from playlist successfully")
