from .context import Context
from .models import Status


def hello(ctx: Context) -> None:
    ctx.respond(Status.OK, {"Content-Type": "text/plain; charset=utf-8"}, b"Hello, World!\n")


def echo(ctx: Context) -> None:
    body = f"{ctx.method.as_string()} {ctx.uri} {ctx.version.as_string()}\n"
    body += "".join(f"{k}: {v}\n" for k, v in ctx.headers.items())
    ctx.respond(Status.OK, {"Content-Type": "text/plain; charset=utf-8"}, body)
