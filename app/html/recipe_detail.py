from jinja2 import Environment
from markdown2 import (  # pyright: ignore[reportMissingTypeStubs]
    markdown,  # pyright: ignore[reportUnknownVariableType]
)
from markupsafe import Markup

from domain.models import RecipeDetails
from domain.services import Membership, Toggle


class RecipeDetail:
    def __init__(
        self,
        recipe: RecipeDetails,
        *,
        membership: Membership,
        environment: Environment,
        toggle: Toggle | None = None,
        template_name: str = "recipe-detail.html",
    ) -> None:
        self.recipe = recipe
        self.membership = membership
        self.toggle = toggle
        self.env = environment
        self.name = template_name

    @property
    def title(self) -> str:
        return self.recipe.name

    @property
    def subtitle(self) -> str:
        return " | ".join(p for p in (self.recipe.category, self.recipe.area) if p)

    @property
    def instructions(self) -> str:
        return Markup(markdown(self.recipe.instructions))

    def render(self) -> str:
        return self.env.get_template(self.name).render(recipe=self)
