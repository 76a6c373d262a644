"""Static airline code lookup (IATA 2-letter and ICAO 3-letter)."""

from __future__ import annotations

import re

# (IATA, ICAO, name)
_AIRLINE_ROWS: list[tuple[str, str, str]] = [
    # North America
    ("UA", "UAL", "United Airlines"),
    ("AA", "AAL", "American Airlines"),
    ("DL", "DAL", "Delta Air Lines"),
    ("WN", "SWA", "Southwest Airlines"),
    ("B6", "JBU", "JetBlue Airways"),
    ("AS", "ASA", "Alaska Airlines"),
    ("NK", "NKS", "Spirit Airlines"),
    ("F9", "FFT", "Frontier Airlines"),
    ("HA", "HAL", "Hawaiian Airlines"),
    ("G4", "AAY", "Allegiant Air"),
    ("AC", "ACA", "Air Canada"),
    ("WS", "WJA", "WestJet"),
    ("PD", "POE", "Porter Airlines"),
    ("AM", "AMX", "Aeromexico"),
    ("YX", "RPA", "Republic Airways"),
    ("OO", "SKW", "SkyWest Airlines"),
    ("PT", "PDT", "Piedmont Airlines"),
    ("OH", "JIA", "PSA Airlines"),
    ("MQ", "ENY", "Envoy Air"),
    ("YV", "ASH", "Mesa Airlines"),
    ("G7", "GJS", "GoJet Airlines"),
    ("9E", "EDV", "Endeavor Air"),
    ("5X", "UPS", "UPS Airlines"),
    ("FX", "FDX", "FedEx Express"),
    # Europe
    ("LH", "DLH", "Lufthansa"),
    ("BA", "BAW", "British Airways"),
    ("AF", "AFR", "Air France"),
    ("KL", "KLM", "KLM Royal Dutch Airlines"),
    ("LX", "SWR", "Swiss International Air Lines"),
    ("OS", "AUA", "Austrian Airlines"),
    ("SN", "BEL", "Brussels Airlines"),
    ("IB", "IBE", "Iberia"),
    ("AZ", "ITY", "ITA Airways"),
    ("TP", "TAP", "TAP Air Portugal"),
    ("A3", "AEE", "Aegean Airlines"),
    ("SK", "SAS", "Scandinavian Airlines"),
    ("AY", "FIN", "Finnair"),
    ("FR", "RYR", "Ryanair"),
    ("U2", "EZY", "easyJet"),
    ("VY", "VLG", "Vueling"),
    ("W6", "WZZ", "Wizz Air"),
    ("EI", "EIN", "Aer Lingus"),
    ("VS", "VIR", "Virgin Atlantic"),
    ("TK", "THY", "Turkish Airlines"),
    # Middle East / Africa
    ("EK", "UAE", "Emirates"),
    ("QR", "QTR", "Qatar Airways"),
    ("EY", "ETD", "Etihad Airways"),
    ("MS", "MSR", "EgyptAir"),
    ("SV", "SVA", "Saudia"),
    ("SA", "SAA", "South African Airways"),
    ("ET", "ETH", "Ethiopian Airlines"),
    ("AT", "RAM", "Royal Air Maroc"),
    ("KQ", "KQA", "Kenya Airways"),
    # Asia / Pacific
    ("SQ", "SIA", "Singapore Airlines"),
    ("CX", "CPA", "Cathay Pacific"),
    ("JL", "JAL", "Japan Airlines"),
    ("NH", "ANA", "All Nippon Airways"),
    ("KE", "KAL", "Korean Air"),
    ("OZ", "AAR", "Asiana Airlines"),
    ("TG", "THA", "Thai Airways"),
    ("MH", "MAS", "Malaysia Airlines"),
    ("CI", "CAL", "China Airlines"),
    ("BR", "EVA", "EVA Air"),
    ("CZ", "CSN", "China Southern Airlines"),
    ("CA", "CCA", "Air China"),
    ("MU", "CES", "China Eastern Airlines"),
    ("AI", "AIC", "Air India"),
    ("6E", "IGO", "IndiGo"),
    ("SG", "SEJ", "SpiceJet"),
    ("QF", "QFA", "Qantas"),
    ("JQ", "JST", "Jetstar"),
    ("VA", "VOZ", "Virgin Australia"),
    ("NZ", "ANZ", "Air New Zealand"),
    ("FJ", "FJI", "Fiji Airways"),
    # Latin America
    ("AV", "AVA", "Avianca"),
    ("LA", "LAN", "LATAM Airlines"),
    ("G3", "GLO", "Gol"),
    ("AR", "ARG", "Aerolineas Argentinas"),
    ("CM", "CMP", "Copa Airlines"),
]

AIRLINES: dict[str, str] = {}
for _iata, _icao, _name in _AIRLINE_ROWS:
    AIRLINES[_iata] = _name
    AIRLINES[_icao] = _name

# ICAO prefix first (greedy), then IATA designators; a digit in an IATA
# designator (6E, U2) is only accepted for known airlines
_ICAO_CALLSIGN_RE = re.compile(r"^([A-Z]{3})\d")
_IATA_CALLSIGN_RE = re.compile(r"^([A-Z0-9]{2})\d")


def lookup_airline(code: str | None) -> str | None:
    """Airline name for an IATA or ICAO code, or None."""
    if not code:
        return None
    return AIRLINES.get(code.strip().upper())


def airline_code_from_callsign(callsign: str | None) -> str | None:
    """Operator designator parsed from the leading letters of a callsign.

    ``UAL1234`` -> ``UAL``, ``BA283`` -> ``BA``. Registrations such as
    ``N123AB`` or ``GABCD`` give None.
    """
    if not callsign:
        return None
    cs = callsign.strip().upper()
    m = _ICAO_CALLSIGN_RE.match(cs)
    if m:
        return m.group(1)
    m = _IATA_CALLSIGN_RE.match(cs)
    if m and (m.group(1).isalpha() or m.group(1) in AIRLINES):
        return m.group(1)
    return None
