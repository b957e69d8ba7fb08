"""Home, help, and about routes."""

from xitzin import Request, Xitzin


def register_routes(app: Xitzin) -> None:
    """Register home routes."""

    @app.gemini("/", name="home")
    def home(request: Request):
        return app.template("home.gmi", title=request.app.state.world.title)

    @app.gemini("/help", name="help")
    def help_page(request: Request):
        return app.template("help.gmi")

    @app.gemini("/about", name="about")
    def about(request: Request):
        world = request.app.state.world
        return app.template(
            "about.gmi",
            title=world.title,
            rooms=len(world.rooms),
            items=len(world.items),
            creatures=len(world.creatures),
        )
