"""Development server.

Starts a pounce ASGI server with the live urlshort App object.
"""


def run_dev_server(app: object, host: str, port: int) -> None:
    """Start a pounce server with the given App.

    Pounce's ``run()`` takes an import string, but the CLI builds a live
    ``App`` object (the redirect table is loaded before serving), so we
    use ``pounce.Server`` directly with the ASGI callable.

    Args:
        app: ASGI callable (urlshort App instance).
        host: Bind host address.
        port: Bind port number.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1)
    server = Server(config, app)
    server.run()
