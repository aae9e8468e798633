from loguru import logger

async def debug_middleware(request, call_next):
    logger.debug(f"{request.method} {request.url.path} query={dict(request.query_params)}")
    response = await call_next(request)
    logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
    return response
