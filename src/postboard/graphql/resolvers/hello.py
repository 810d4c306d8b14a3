async def resolve_hello() -> str:
    return "hello world"
