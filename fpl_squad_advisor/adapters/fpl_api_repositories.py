"""FPL API repository implementations."""

import time
from typing import Any, Dict, Iterable, List, Optional

import requests
from loguru import logger
from pydantic import ValidationError

from fpl_squad_advisor.config import FPLConfig, config
from fpl_squad_advisor.domain.common.result import DomainError, FetchFailure, Result
from fpl_squad_advisor.domain.models.chip import ChipKind, ChipUsage
from fpl_squad_advisor.domain.models.fixture import FixtureDomain
from fpl_squad_advisor.domain.models.player import PlayerDomain
from fpl_squad_advisor.domain.models.squad import SquadSlot, SquadSnapshot
from fpl_squad_advisor.domain.models.team import TeamDomain
from fpl_squad_advisor.domain.repositories.fixture_repository import FixtureRepository
from fpl_squad_advisor.domain.repositories.manager_repository import ManagerRepository
from fpl_squad_advisor.domain.repositories.player_repository import PlayerRepository
from fpl_squad_advisor.domain.repositories.team_repository import TeamRepository
from fpl_squad_advisor.utils.helpers import parse_int


class FPLApiError(Exception):
    """A failed request to the FPL API."""

    def __init__(
        self,
        source: str,
        failure: FetchFailure,
        message: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.source = source
        self.failure = failure
        self.status_code = status_code

    def to_domain_error(self) -> DomainError:
        details = {"status_code": self.status_code} if self.status_code else None
        return DomainError.external_api_error(
            str(self), source=self.source, failure=self.failure, details=details
        )


class FPLApiClient:
    """Client for the public Fantasy Premier League API."""

    def __init__(
        self,
        settings: Optional[FPLConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = settings or config
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", "fpl-squad-advisor")

    def get_json(self, path: str, source: str) -> Any:
        """
        Fetch JSON from an API path, retrying timeouts and network errors.

        Args:
            path: Path below the API root, e.g. "bootstrap-static/"
            source: Name of the sub-fetch, reported on failure

        Returns:
            Decoded JSON response

        Raises:
            FPLApiError: If the request keeps failing or returns a bad status
        """
        api = self.config.api
        url = f"{api.base_url.rstrip('/')}/{path.lstrip('/')}"

        attempts = api.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self.session.get(url, timeout=api.timeout_seconds)
                response.raise_for_status()
                return response.json()
            except requests.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                raise FPLApiError(
                    source,
                    FetchFailure.STATUS,
                    f"{source} request returned HTTP {status}",
                    status_code=status,
                )
            except requests.Timeout:
                failure = FetchFailure.TIMEOUT
                message = f"{source} request timed out after {api.timeout_seconds:.0f}s"
            except requests.ConnectionError as e:
                failure = FetchFailure.NETWORK
                message = f"{source} request failed: {e}"
            except ValueError as e:
                raise FPLApiError(
                    source, FetchFailure.INVALID_PAYLOAD, f"{source} returned invalid JSON: {e}"
                )

            if attempt < attempts:
                delay = api.retry_backoff_seconds * attempt
                logger.warning(
                    f"⚠️ {message} (attempt {attempt}/{attempts}), retrying in {delay:.1f}s"
                )
                time.sleep(delay)

        logger.error(f"❌ {message}")
        raise FPLApiError(source, failure, message)

    def get_bootstrap_static(self) -> Dict[str, Any]:
        return self.get_json("bootstrap-static/", source="bootstrap")

    def get_fixtures(self) -> List[Dict[str, Any]]:
        return self.get_json("fixtures/", source="fixtures")

    def get_entry(self, manager_id: int) -> Dict[str, Any]:
        return self.get_json(f"entry/{manager_id}/", source="entry")

    def get_entry_picks(self, manager_id: int, event: int) -> Dict[str, Any]:
        return self.get_json(f"entry/{manager_id}/event/{event}/picks/", source="picks")

    def get_entry_history(self, manager_id: int) -> Dict[str, Any]:
        return self.get_json(f"entry/{manager_id}/history/", source="history")

    def get_element_summary(self, player_id: int) -> Dict[str, Any]:
        return self.get_json(f"element-summary/{player_id}/", source="element-summary")


def free_transfers_from_history(
    rounds: List[Dict[str, Any]],
    chips: Iterable[ChipUsage],
    max_banked: int = 5,
) -> int:
    """
    Free transfers available for the next deadline, replayed from entry history.

    Each gameweek adds one free transfer up to the banking cap. Transfers made
    in a wildcard or free hit week do not consume any.

    Args:
        rounds: The 'current' rows of the entry history (event, event_transfers)
        chips: Chips played this season
        max_banked: Banking cap

    Returns:
        Free transfers available now
    """
    if not rounds:
        return 1

    unlimited_weeks = {
        usage.event
        for usage in chips
        if usage.chip in (ChipKind.WILDCARD, ChipKind.FREE_HIT)
    }

    banked = 0
    for row in sorted(rounds, key=lambda r: parse_int(r.get("event"))):
        available = min(max_banked, banked + 1)
        if parse_int(row.get("event")) in unlimited_weeks:
            banked = available
        else:
            banked = max(0, available - parse_int(row.get("event_transfers")))
    return min(max_banked, banked + 1)


class FPLApiRepository(
    PlayerRepository, TeamRepository, FixtureRepository, ManagerRepository
):
    """
    All data repositories backed by the public FPL API.

    The bootstrap payload and each manager's history are cached on the
    instance, so one repository serves one consistent snapshot.
    """

    def __init__(
        self,
        client: Optional[FPLApiClient] = None,
        settings: Optional[FPLConfig] = None,
    ):
        self.config = settings or config
        self.client = client or FPLApiClient(self.config)
        self._bootstrap: Optional[Dict[str, Any]] = None
        self._histories: Dict[int, Dict[str, Any]] = {}

    def _get_bootstrap(self) -> Dict[str, Any]:
        if self._bootstrap is None:
            self._bootstrap = self.client.get_bootstrap_static()
        return self._bootstrap

    def _get_history(self, manager_id: int) -> Dict[str, Any]:
        if manager_id not in self._histories:
            self._histories[manager_id] = self.client.get_entry_history(manager_id)
        return self._histories[manager_id]

    def get_current_players(self) -> Result[List[PlayerDomain]]:
        """Get all players from the bootstrap payload; invalid rows are skipped."""
        try:
            elements = self._get_bootstrap().get("elements", [])
        except FPLApiError as e:
            return Result.failure(e.to_domain_error())

        players = []
        for element in elements:
            try:
                players.append(PlayerDomain.from_api(element))
            except (KeyError, ValueError, ValidationError) as e:
                logger.warning(f"⚠️ Skipping player {element.get('id')}: {e}")

        if not players:
            return Result.failure(
                DomainError.data_not_found(
                    "No players found in bootstrap data", details={"source": "bootstrap"}
                )
            )
        return Result.success(players)

    def get_current_teams(self) -> Result[List[TeamDomain]]:
        """Get all clubs from the bootstrap payload."""
        try:
            raw_teams = self._get_bootstrap().get("teams", [])
            return Result.success([TeamDomain.from_api(t) for t in raw_teams])
        except FPLApiError as e:
            return Result.failure(e.to_domain_error())
        except (KeyError, ValidationError) as e:
            return Result.failure(
                DomainError.validation_error(
                    f"Invalid team data: {e}", details={"source": "bootstrap"}
                )
            )

    def get_fixtures(self) -> Result[List[FixtureDomain]]:
        """Get every fixture of the season."""
        try:
            raw_fixtures = self.client.get_fixtures()
            return Result.success([FixtureDomain.from_api(f) for f in raw_fixtures])
        except FPLApiError as e:
            return Result.failure(e.to_domain_error())
        except (KeyError, ValidationError) as e:
            return Result.failure(
                DomainError.validation_error(
                    f"Invalid fixture data: {e}", details={"source": "fixtures"}
                )
            )

    def get_chip_history(self, manager_id: int) -> Result[List[ChipUsage]]:
        """Get chips played this season; unknown chip names are ignored."""
        try:
            history = self._get_history(manager_id)
        except FPLApiError as e:
            return Result.failure(e.to_domain_error())

        usages = []
        for chip in history.get("chips", []):
            usage = ChipUsage.from_api(chip)
            if usage is None:
                logger.warning(f"⚠️ Ignoring unknown chip entry: {chip}")
                continue
            usages.append(usage)
        return Result.success(sorted(usages, key=lambda u: u.event))

    def get_squad_snapshot(
        self, manager_id: int, free_transfers: Optional[int] = None
    ) -> Result[SquadSnapshot]:
        """Get the manager's current squad, bank and free transfers.

        Free transfers are replayed from the entry history unless overridden;
        when the history cannot be used the configured default applies.
        """
        try:
            entry = self.client.get_entry(manager_id)
            current_event = entry.get("current_event")
            if not current_event:
                return Result.failure(
                    DomainError.data_not_found(
                        f"Manager {manager_id} has no current gameweek yet",
                        details={"source": "entry"},
                    )
                )
            picks = self.client.get_entry_picks(manager_id, current_event)
        except FPLApiError as e:
            return Result.failure(e.to_domain_error())

        if free_transfers is None:
            free_transfers = self._free_transfers(manager_id)

        try:
            snapshot = SquadSnapshot(
                manager_id=manager_id,
                current_event=current_event,
                slots=[SquadSlot.from_api(p) for p in picks.get("picks", [])],
                bank=parse_int((picks.get("entry_history") or {}).get("bank")),
                free_transfers=free_transfers,
            )
        except (KeyError, ValidationError) as e:
            return Result.failure(
                DomainError.validation_error(
                    f"Invalid squad for manager {manager_id}: {e}",
                    details={"source": "picks"},
                )
            )
        return Result.success(snapshot)

    def _free_transfers(self, manager_id: int) -> int:
        transfers = self.config.transfers
        chips = self.get_chip_history(manager_id)
        if chips.is_failure:
            logger.warning(
                f"⚠️ Could not replay free transfers ({chips.error.message}), "
                f"assuming {transfers.default_free_transfers}"
            )
            return transfers.default_free_transfers
        rounds = self._get_history(manager_id).get("current", [])
        return free_transfers_from_history(
            rounds, chips.value, max_banked=transfers.max_banked_transfers
        )

    def get_recent_points(self, player_ids: Iterable[int]) -> Result[Dict[int, int]]:
        """Sum each player's points over their most recent rounds.

        Only the first ``recent_points_limit`` players are looked up, in batches.
        Per-player failures are logged and skipped.
        """
        api = self.config.api
        ids = list(player_ids)[: api.recent_points_limit]
        points: Dict[int, int] = {}

        for start in range(0, len(ids), api.recent_points_batch_size):
            batch = ids[start : start + api.recent_points_batch_size]
            logger.debug(f"📈 Fetching recent points for players {batch}")
            for player_id in batch:
                try:
                    summary = self.client.get_element_summary(player_id)
                except FPLApiError as e:
                    logger.warning(f"⚠️ Recent points for player {player_id} failed: {e}")
                    continue
                history = summary.get("history", [])
                recent = history[-api.recent_points_rounds :]
                points[player_id] = sum(parse_int(r.get("total_points")) for r in recent)

        return Result.success(points)
