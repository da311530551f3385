"""HIGH and CRITICAL CVEs for Windows releases from the NIST NVD API."""
import logging
import re

import requests

from ..core.errors import FieldValidationError, VulnerabilityLookupError
from ..core.settings import settings
from ..models.SoftwareAsset import Vulnerability

logger = logging.getLogger(__name__)

RELEASE_NAME = re.compile(r"^(?:\d{4}|\d{2}H\d)$")
SEVERITIES = ("CRITICAL", "HIGH")

# NVD CPE names use release names rather than build numbers.
# Needs updating as new releases ship.
WINDOWS_RELEASES = {
    # Windows 10
    "10.0.10240": "1507",
    "10.0.10586": "1511",
    "10.0.14393": "1607",
    "10.0.15063": "1703",
    "10.0.16299": "1709",
    "10.0.17134": "1803",
    "10.0.17763": "1809",
    "10.0.18362": "1903",
    "10.0.18363": "1909",
    "10.0.19041": "2004",
    "10.0.19042": "20H2",
    "10.0.19043": "21H1",
    "10.0.19044": "21H2",
    "10.0.19045": "22H2",
    # Windows 11
    "10.0.22000": "21H2",
    "10.0.22621": "22H2",
    "10.0.22631": "23H2",
    "10.0.26100": "24H2",
}


def release_name(version: str) -> str:
    version = version.strip()
    if RELEASE_NAME.match(version):
        return version
    try:
        return WINDOWS_RELEASES[version]
    except KeyError:
        raise FieldValidationError(
            "version",
            "Version number not found, please try again later, if the issue persists, contact an administrator.",
        ) from None


def _severity(item: dict) -> str | None:
    metrics = item.get("cve", {}).get("metrics", {})
    for key in ("cvssMetricV30", "cvssMetricV31"):
        entries = metrics.get(key) or []
        if entries:
            severity = entries[0].get("cvssData", {}).get("baseSeverity")
            if severity:
                return severity
    return None


def _to_vulnerability(item: dict, severity: str | None) -> Vulnerability:
    cve = item.get("cve", {})
    descriptions = cve.get("descriptions") or [{}]
    return Vulnerability(
        cve_id=cve.get("id"),
        description=descriptions[0].get("value"),
        severity=severity,
    )


def _fetch(http, cpe_name: str, api_key: str | None, severity: str | None = None) -> list[dict]:
    params = {"cpeName": cpe_name}
    if severity:
        params["cvssV3Severity"] = severity
    headers = {"Accept": "application/json", "User-Agent": settings.PROJECT_NAME}
    if api_key:
        headers["apiKey"] = api_key

    response = http.get(
        settings.NVD_API_URL,
        params=params,
        headers=headers,
        timeout=settings.NVD_TIMEOUT_SECONDS,
    )
    if not response.ok:
        logger.error("NVD lookup for %s failed: %s %s", cpe_name, response.status_code, response.reason)
        raise VulnerabilityLookupError(response.status_code, response.reason)
    return response.json().get("vulnerabilities") or []


def lookup_vulnerabilities(version: str, api_key: str | None = None, http=None) -> list[Vulnerability]:
    """Return the HIGH and CRITICAL vulnerabilities of a Windows release.

    ``version`` is either a release name (``22H2``) or a build number
    (``10.0.19045``). Releases before 23H2 are looked up as Windows 10, later
    ones as Windows 11.
    """
    if not version or not version.strip():
        return []
    http = http or requests
    api_key = api_key or settings.NVD_API_KEY
    release = release_name(version)

    results = []
    if int(release[:2]) < 23:
        cpe_name = f"cpe:2.3:o:microsoft:windows_10:{release}"
        for severity in SEVERITIES:
            for item in _fetch(http, cpe_name, api_key, severity):
                results.append(_to_vulnerability(item, _severity(item)))
    else:
        # Windows 11 is queried unfiltered and narrowed here
        cpe_name = f"cpe:2.3:o:microsoft:windows_11:{release}"
        for item in _fetch(http, cpe_name, api_key):
            severity = _severity(item)
            if severity in SEVERITIES:
                results.append(_to_vulnerability(item, severity))

    logger.info("Found %d vulnerabilities for %s", len(results), cpe_name)
    return results
