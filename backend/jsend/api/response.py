from __future__ import annotations

from starlette.responses import Response

from jsend.core.config import get_settings
from jsend.envelope import Envelope


class StarletteResponseCarrier:
    """Exposes a Starlette response as the body/header sink an envelope renders into."""

    def __init__(self, response: Response) -> None:
        self.response = response

    def set_body(self, body: str) -> None:
        self.response.body = body.encode("utf-8")
        self.response.headers["content-length"] = str(len(self.response.body))

    def set_header(self, name: str, value: str) -> None:
        self.response.headers[name] = value


def jsend_response(envelope: Envelope, status_code: int = 200, options: int | None = None) -> Response:
    settings = get_settings()
    response = Response(status_code=status_code)
    envelope.render_into(
        StarletteResponseCarrier(response),
        settings.encode_options if options is None else options,
        format_header=settings.response_format_header,
        format_name=settings.response_format,
    )
    return response
