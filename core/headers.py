"""Header construction for outbound responses and upstream requests."""

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Content-Type": "application/json",
}


class HeaderBuilder:
    """Build headers for the client side and the Airtable side."""

    def build_response_headers(self) -> dict[str, str]:
        """CORS and JSON headers carried by every outbound response."""
        return dict(CORS_HEADERS)

    def build_diagnostic_headers(self) -> dict[str, str]:
        """Reduced header set used by the diagnostic endpoint."""
        return {
            "Access-Control-Allow-Origin": "*",
            "Content-Type": "application/json",
        }

    def build_upstream_headers(self, api_key: str) -> dict[str, str]:
        """Bearer credential plus JSON content type; nothing from the client."""
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
