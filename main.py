import os
from typing import Literal

import uvicorn

from pgadvisor.static.vars import YEAR
from pgadvisor.utils.base import OsGetEnvBool

if __name__ == "__main__":
    if os.getenv('PORT') is not None:
        _port: int = int(os.getenv('PORT'))
    else:
        _port: int = int(os.getenv('UV_PORT', '8001'))
    _host: str = os.getenv('UV_HOST', '0.0.0.0')
    _workers: int = int(os.getenv('UV_WORKERS', '1'))
    _access_log: bool = OsGetEnvBool('UV_ACCESS_LOG', True)
    _http: Literal["auto", "h11", "httptools"] = os.getenv('UV_HTTP', 'auto')
    _loop: Literal["none", "auto", "asyncio", "uvloop"] = os.getenv('UV_LOOP', 'auto')
    _proxy_headers = OsGetEnvBool('UV_PROXY_HEADERS', False)
    _server_header = OsGetEnvBool('UV_SERVER_HEADER', False)
    _date_header = OsGetEnvBool('UV_DATE_HEADER', False)
    _limit_concurrency = int(os.getenv('UV_LIMIT_CONCURRENCY', '1000'))

    # ==============================================================================
    # Offload the headers
    # https://www.keycdn.com/blog/http-security-headers
    _SecurityHeaders = [
        ('Strict-Transport-Security', f'max-age={YEAR}; includeSubDomains; preload'),
        ('X-Content-Type-Options', 'nosniff'),
        ('X-Frame-Options', 'DENY'),
        ('Content-Security-Policy', "default-src 'self'"),
        ('Referrer-Policy', 'strict-origin-when-cross-origin'),
    ]

    # The application is given as an import string so that multiple workers can be spawned
    uvicorn.run('web:app', host=_host, port=_port, access_log=_access_log, workers=_workers,
                http=_http, loop=_loop, limit_concurrency=_limit_concurrency,
                proxy_headers=_proxy_headers, server_header=_server_header, date_header=_date_header,
                headers=_SecurityHeaders)
