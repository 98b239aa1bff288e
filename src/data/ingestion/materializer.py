"""Write one (season, gender) partition of the dataset."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional, Sequence

from ...models.game import Game
from ...models.season import Season
from ...models.standings import TeamStandings
from ...models.team import Team

logger = logging.getLogger(__name__)

TEAMS_FILE = "teams.json"
GAMES_FILE = "games.json"
STANDINGS_FILE = "standings.json"
MANIFEST_FILE = "manifest.json"


def partition_dir(output_dir, season: Season, gender: str) -> Path:
    return Path(output_dir) / season.label / gender


class DatasetMaterializer:
    """
    Replace a partition's files as a unit.

    Everything is written into a staging directory beside the target. The old
    partition is then renamed aside, the staging directory renamed into its
    place, and the old copy removed, so a reader sees either the previous
    complete set or the new one.
    """

    def __init__(self, output_dir: str = "data"):
        self.output_dir = Path(output_dir)

    def write(
        self,
        season: Season,
        gender: str,
        teams: Sequence[Team],
        games: Sequence[Game],
        standings: Sequence[TeamStandings],
        manifest: Optional[Dict] = None,
    ) -> Path:
        """
        Materialize one partition.

        Args:
            season: Season being written
            gender: ``mens`` or ``womens``
            teams: Full team collection, including external opponents
            games: Games in their final order
            standings: Standings rows in their final order
            manifest: Optional run metadata written as ``manifest.json``

        Returns:
            Path of the final partition directory
        """
        target = partition_dir(self.output_dir, season, gender)
        target.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{gender}-staging-", dir=target.parent))
        try:
            self._write_json(staging / TEAMS_FILE, [team.to_dict() for team in teams])
            self._write_json(staging / GAMES_FILE, [game.to_dict() for game in games])
            self._write_json(staging / STANDINGS_FILE, [row.to_dict() for row in standings])
            if manifest is not None:
                self._write_json(staging / MANIFEST_FILE, manifest)
            # mkdtemp creates 0700; published partitions are world-readable.
            os.chmod(staging, 0o755)
            self._swap(staging, target)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise
        logger.info(
            "Wrote %d teams, %d games, %d standings rows to %s",
            len(teams),
            len(games),
            len(standings),
            target,
        )
        return target

    @staticmethod
    def _write_json(path: Path, payload) -> None:
        with open(path, "w") as f:
            json.dump(payload, f, indent=2)

    @staticmethod
    def _swap(staging: Path, target: Path) -> None:
        backup = None
        if target.exists():
            backup = Path(tempfile.mkdtemp(prefix=f".{target.name}-old-", dir=target.parent))
            backup.rmdir()
            target.rename(backup)
        try:
            staging.rename(target)
        except OSError:
            if backup is not None:
                backup.rename(target)
            raise
        if backup is not None:
            shutil.rmtree(backup)
