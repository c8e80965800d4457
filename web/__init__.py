import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from time import perf_counter

from fastapi import FastAPI, Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp

from pgadvisor import advisor
from pgadvisor.static.c_timezone import GetTimezone
from pgadvisor.static.vars import APP_NAME_LOWER, APP_NAME_UPPER, __version__ as backend_version, MINUTE, SECOND, K10
from pgadvisor.tuner.data.options import PG_TUNE_USR_OPTIONS, translate_validation_errors
from pgadvisor.tuner.data.sizing import MalformedSizeError
from pgadvisor.tuner.pg_dataclass import PG_TUNE_REQUEST
from pgadvisor.utils.base import OsGetEnvBool
from web.data import EXAMPLE_RESPONSE

# ==================================================================================================
__all__ = ['app']
_logger = logging.getLogger(APP_NAME_UPPER)
_TIMEZONE = GetTimezone()[0]

# 0: Development, 1: Production
_APP_IN_DEVELOPMENT: bool = OsGetEnvBool(f'{APP_NAME_UPPER}_DEV_MODE', True)


@asynccontextmanager
async def app_lifespan(application: ASGIApp | FastAPI):
    # On-Startup
    _logger.info('Starting up the application ...')
    _logger.info('Application is ready to serve user traffic ...')
    yield

    # Clean up and release the resources
    _logger.info('Safely shutting down the application. The HTTP(S) connection is cleanup ...')


# ==================================================================================================
__version__ = '0.2.0'
app: FastAPI = FastAPI(
    debug=False,
    title=APP_NAME_UPPER,
    summary=f'The :project:`{APP_NAME_LOWER}` recommends a PostgreSQL configuration from the machine and the '
            f'workload profile',
    description=f'''
The :project:`{APP_NAME_LOWER}` derives a starting PostgreSQL configuration (memory, WAL, checkpoint, parallelism,
connections and planner hints) from the memory, the CPU count, the storage, the operating system, the workload
type, the replicas and the database size. The tuning is deterministic and stateless: it never connects to the
database server.
''',
    version=__version__,
    openapi_url='/openapi.json' if _APP_IN_DEVELOPMENT else None,
    docs_url='/docs' if _APP_IN_DEVELOPMENT else None,
    redoc_url='/redoc' if _APP_IN_DEVELOPMENT else None,
    lifespan=app_lifespan,
    license_info={
        'name': 'MIT License',
        'url': 'https://opensource.org/license/mit/',
    },
)
_logger.info(f'The FastAPI application has been initialized. Developer Mode: {_APP_IN_DEVELOPMENT}')

_private_cache = 'private, must-revalidate'
_static_cache = (f'max-age={45 * SECOND if _APP_IN_DEVELOPMENT else 30 * MINUTE}, {_private_cache}, '
                 f'stale-while-revalidate={30 * SECOND if _APP_IN_DEVELOPMENT else 3 * MINUTE}')
_tune_cache = f'max-age={30 * SECOND}, {_private_cache}'


# ==================================================================================================
# Error handling
def _bad_request(errors: dict[str, str]) -> ORJSONResponse:
    return ORJSONResponse(
        content={'errors': errors},
        status_code=status.HTTP_400_BAD_REQUEST,
        headers={'Cache-Control': 'no-cache'}
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    return _bad_request(translate_validation_errors(exc.errors()))


@app.exception_handler(MalformedSizeError)
async def malformed_size_exception_handler(request: Request, exc: MalformedSizeError):
    _logger.error(f'The tuning of {request.url.path} failed on an internal size conversion: {exc}')
    return ORJSONResponse(
        content={'errors': {'__root__': 'The server has encountered an internal error while tuning.'}},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers={'Cache-Control': 'no-cache'}
    )


# ----------------------------------------------------------------------------------------------
# Health Check API
_SERVICE_START_TIME = datetime.now(tz=_TIMEZONE)
@app.get('/_health', status_code=status.HTTP_200_OK)
async def health():
    _service_uptime: timedelta = datetime.now(tz=_TIMEZONE) - _SERVICE_START_TIME
    return ORJSONResponse(
        content={
            'status': 'HEALTHY',
            'start_time': _SERVICE_START_TIME.isoformat(),
            'uptime': str(_service_uptime),
            'uptime_seconds': _service_uptime.total_seconds(),
            'frontend': __version__,
            'backend': backend_version
        },
        status_code=status.HTTP_200_OK,
        headers={
            'Cache-Control': f'max-age={2 * MINUTE}, s-maxage={45 * SECOND}, {_private_cache}'
        }
    )


# ----------------------------------------------------------------------------------------------
# Backend API
@app.get('/api/v1/tune', status_code=status.HTTP_200_OK, response_class=ORJSONResponse)
async def tune(request: Request):
    t = perf_counter()
    try:
        options = PG_TUNE_USR_OPTIONS.model_validate(dict(request.query_params))
    except ValidationError as e:
        return _bad_request(translate_validation_errors(e.errors()))
    return ORJSONResponse(
        content=advisor.optimize(options).generate_content(output_format='json'),
        status_code=status.HTTP_200_OK,
        headers={
            'Cache-Control': _tune_cache,
            'X-Response-BackendTime': f'{(perf_counter() - t) * K10:.2f}ms'
        }
    )


@app.post('/api/v1/tune', status_code=status.HTTP_200_OK)
async def trigger_tune(request: PG_TUNE_REQUEST):
    t = perf_counter()
    content = advisor.optimize(request).generate_content(output_format=request.output_format)
    headers = {
        'Cache-Control': _tune_cache,
        'X-Response-BackendTime': f'{(perf_counter() - t) * K10:.2f}ms'
    }
    if request.output_format == 'conf':
        return PlainTextResponse(content=content, status_code=status.HTTP_200_OK, headers=headers)
    return ORJSONResponse(content=content, status_code=status.HTTP_200_OK, headers=headers)


@app.get('/api/v1/schema', status_code=status.HTTP_200_OK)
async def schema():
    return ORJSONResponse(
        content=PG_TUNE_USR_OPTIONS.model_json_schema(),
        status_code=status.HTTP_200_OK,
        headers={'Cache-Control': _static_cache}
    )


@app.get('/api/v1/example', status_code=status.HTTP_200_OK)
async def example():
    return ORJSONResponse(
        content=EXAMPLE_RESPONSE.generate_content(output_format='json'),
        status_code=status.HTTP_200_OK,
        headers={'Cache-Control': _static_cache}
    )
