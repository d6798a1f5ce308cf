"""League API routers, mounted under ``/api``."""

from fastapi import APIRouter

from . import auth, dashboard, divisions, games, players, standings, statistics, teams, tournaments

router = APIRouter(prefix="/api")
router.include_router(auth.router)
router.include_router(tournaments.router)
router.include_router(divisions.router)
router.include_router(teams.router)
router.include_router(players.router)
router.include_router(games.router)
router.include_router(standings.router)
router.include_router(statistics.router)
router.include_router(dashboard.router)

__all__ = ["router"]
