from typing import Any, Mapping


class RecipeSummary:
    def __init__(
        self,
        *,
        id: str,
        name: str = "",
        image_url: str = "",
        category: str | None = None,
        area: str | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.image_url = image_url
        self.category = category
        self.area = area

    def __repr__(self) -> str:
        return f"<RecipeSummary(id={self.id}, name={self.name})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecipeSummary):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict[str, str]:
        data = {"id": self.id, "name": self.name, "imageUrl": self.image_url}
        if self.category is not None:
            data["category"] = self.category
        if self.area is not None:
            data["area"] = self.area
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RecipeSummary":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            image_url=data.get("imageUrl") or "",
            category=data.get("category"),
            area=data.get("area"),
        )


class Ingredient:
    def __init__(self, ingredient: str, measure: str | None = None) -> None:
        self.ingredient = ingredient
        self.measure = measure

    def __repr__(self) -> str:
        return f"<Ingredient({self.measure} {self.ingredient})>"

    def __str__(self) -> str:
        return f"{self.measure} {self.ingredient}" if self.measure else self.ingredient


class RecipeDetails:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        image_url: str = "",
        category: str | None = None,
        area: str | None = None,
        instructions: str = "",
        ingredients: list[Ingredient] | None = None,
        tags: list[str] | None = None,
        youtube_url: str | None = None,
        source: str | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.image_url = image_url
        self.category = category
        self.area = area
        self.instructions = instructions
        self.ingredients = [] if ingredients is None else ingredients
        self.tags = [] if tags is None else tags
        self.youtube_url = youtube_url
        self.source = source

    def __repr__(self) -> str:
        return f"<RecipeDetails(id={self.id}, name={self.name})>"

    def summary(self) -> RecipeSummary:
        """The fields a collection keeps for this recipe."""
        return RecipeSummary(
            id=self.id,
            name=self.name,
            image_url=self.image_url,
            category=self.category,
            area=self.area,
        )
