"""
Beacon API Client

Fetches beacon block headers and their execution timestamps from a Beacon
node REST API, and searches adjacent slots when a slot was missed.

Endpoints used:
- GET {base}/eth/v1/beacon/headers/{block_id}
- GET {base}/eth/v2/beacon/blocks/{block_id}
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import ValidationError

from beacon_core.http.client import HttpClient, HttpError, HttpResponse
from beacon_core.schemas.errors import (
    BeaconApiException,
    BeaconProofException,
    HeaderNotFoundException,
    TimestampUnavailableException,
)
from beacon_core.schemas.header import HeaderData

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Which way to search from a reference slot."""
    PREVIOUS = "previous"
    NEXT = "next"
    REQUESTED = "requested"


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class BeaconClient:
    """
    Client for the Beacon node REST API.

    Usage:
        client = BeaconClient("http://localhost:5052")
        header = client.fetch_block_header("head")
        previous = client.find_header(header, Direction.PREVIOUS, attempts=5)
    """

    def __init__(
        self,
        base_url: str,
        *,
        http: Optional[HttpClient] = None,
        timeout: float = 5.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or HttpClient(timeout=timeout)

    def _get_json(self, url: str) -> tuple[HttpResponse, Any]:
        try:
            response = self.http.get(url)
        except HttpError as e:
            raise BeaconApiException(
                f"error fetching {url}: {e}",
                url=url,
                retryable=True,
            ) from e

        if not response.ok:
            return response, None

        try:
            return response, response.json()
        except ValueError as e:
            raise BeaconApiException(
                f"error decoding API response from {url}: {e}",
                url=url,
                status_code=response.status_code,
            ) from e

    def fetch_block_header(self, block_id: str) -> HeaderData:
        """
        Fetch a header and its execution payload timestamp.

        Args:
            block_id: Slot number as a decimal string, or "head"

        Returns:
            HeaderData with raw string fields and the timestamp

        Raises:
            BeaconApiException: non-200 status, transport failure or bad JSON
            TimestampUnavailableException: the block carries no timestamp
        """
        header_url = f"{self.base_url}/eth/v1/beacon/headers/{block_id}"
        response, payload = self._get_json(header_url)
        if payload is None:
            raise BeaconApiException(
                f"API returned status code {response.status_code}",
                url=header_url,
                status_code=response.status_code,
                retryable=response.status_code >= 500,
            )

        message = _dig(payload, "data", "header", "message") or {}
        fields = {
            "slot": message.get("slot") or "",
            "proposer_index": message.get("proposer_index") or "",
            "parent_root": message.get("parent_root") or "",
            "state_root": message.get("state_root") or "",
            "body_root": message.get("body_root") or "",
            "block_root": _dig(payload, "data", "root") or "",
        }

        block_url = f"{self.base_url}/eth/v2/beacon/blocks/{block_id}"
        response, block = self._get_json(block_url)
        if block is None:
            raise BeaconApiException(
                f"block data not found (status code {response.status_code})",
                url=block_url,
                status_code=response.status_code,
                retryable=response.status_code >= 500,
            )

        raw_timestamp = _dig(block, "data", "message", "body", "execution_payload", "timestamp")
        if raw_timestamp in (None, ""):
            raise TimestampUnavailableException(
                f"block {block_id} has no execution payload timestamp",
                slot=fields["slot"] or block_id,
            )
        try:
            timestamp = int(raw_timestamp)
        except (TypeError, ValueError) as e:
            raise BeaconApiException(
                f"error parsing timestamp {raw_timestamp!r}: {e}",
                url=block_url,
            ) from e

        try:
            return HeaderData(timestamp=timestamp, **fields)
        except ValidationError as e:
            raise BeaconApiException(
                f"unexpected header field types from {header_url}: {e}",
                url=header_url,
            ) from e

    def fetch_latest_header(self) -> HeaderData:
        """Fetch the header at the chain head."""
        logger.info(f"Fetching latest beacon block header from {self.base_url}...")
        header = self.fetch_block_header("head")
        logger.info(f"Latest block is at slot {header.slot} with timestamp {header.timestamp}")
        return header

    def find_header(
        self,
        reference: HeaderData,
        direction: Direction,
        attempts: int,
    ) -> HeaderData:
        """
        Find a filled slot relative to a reference header.

        PREVIOUS tries slot-1 .. slot-attempts, NEXT tries slot+1 ..
        slot+attempts, REQUESTED tries the reference slot itself up to
        attempts times. The search stops early below slot 0.

        Raises:
            HeaderNotFoundException: when every attempt fails
            ValueError: if the reference slot is not a decimal integer
        """
        slot = reference.slot_number

        for attempt in range(1, attempts + 1):
            if direction == Direction.PREVIOUS:
                if slot < attempt:
                    break
                target = slot - attempt
            elif direction == Direction.NEXT:
                target = slot + attempt
            else:
                target = slot

            logger.info(f"Fetching beacon block header at slot {target}... (attempt {attempt}/{attempts})")

            try:
                header = self.fetch_block_header(str(target))
            except BeaconProofException as e:
                logger.warning(f"Error fetching block header at slot {target}: {e}")
                continue

            if header.slot:
                block_time = datetime.fromtimestamp(header.timestamp or 0, tz=timezone.utc)
                logger.info(f"Successfully fetched block header at slot {target}")
                logger.info(f"Block time: {block_time.strftime('%Y-%m-%d %H:%M:%S UTC')}")
                logger.info(f"Block proposer: {header.proposer_index}")
                return header

        logger.error(f"Failed to fetch any valid beacon block header after {attempts} attempts.")
        raise HeaderNotFoundException(
            "could not fetch any valid beacon block header",
            slot=slot,
            attempts=attempts,
        )

    def close(self) -> None:
        self.http.close()
