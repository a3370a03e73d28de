"""Tests for recipe content partition and recipe records."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from book_builder.core.book.recipe import (
    Exact,
    Recipe,
    RecipeContent,
    RecipeDocument,
    RecipeHeader,
)
from book_builder.core.document_processor import TextBlock, parse_markdown, render_markdown
from book_builder.exceptions.structure_exceptions import (
    EmptyIngredientNameError,
    InvalidNotesShapeError,
    InvalidStepsShapeError,
    MetadataSchemaError,
    MissingMetadataError,
)

WHEN = datetime(2024, 2, 2, tzinfo=timezone.utc)

BODY = """\
A *simple* dish.

# Preparation

1. First.
2. Second.

# Notes

- A note.
"""


def parse_content(text: str) -> RecipeContent:
    return RecipeContent.parse(parse_markdown(text, with_metadata=False))


class TestRecipeContent:
    """Tests for the recipe body partition."""

    def test_partition(self):
        """Test description, steps and notes are separated."""
        content = parse_content(BODY)
        assert content.description == TextBlock.from_text("A *simple* dish.")
        assert [step.to_text() for step in content.steps] == ["First.", "Second."]
        assert [note.to_text() for note in content.notes] == ["A note."]

    def test_sections_in_any_order(self):
        """Test Notes may come before Preparation."""
        content = parse_content("# Notes\n\n- n\n\n# Preparation\n\n1. s\n")
        assert content.description.to_text() == ""
        assert [step.to_text() for step in content.steps] == ["s"]

    def test_unknown_heading_dropped(self, caplog):
        """Test content under an unknown heading is ignored with a warning."""
        text = BODY + "\n# Variations\n\nIgnored text.\n"
        with caplog.at_level(logging.WARNING):
            content = parse_content(text)
        assert "Unrecognized heading" in caplog.text
        assert "Ignored" not in content.description.to_text()
        assert [note.to_text() for note in content.notes] == ["A note."]

    def test_single_node_is_treated_as_top_level(self, caplog):
        """Test a non-root node is partitioned like a root holding it."""
        heading = parse_markdown("# Variations", with_metadata=False).children[0]
        with caplog.at_level(logging.WARNING):
            with pytest.raises(InvalidStepsShapeError):
                RecipeContent.parse(heading)
        assert "Unrecognized heading" in caplog.text

    def test_formatted_heading_is_not_recognized(self):
        """Test **Preparation** is not the Preparation section."""
        with pytest.raises(InvalidStepsShapeError):
            parse_content("# **Preparation**\n\n1. s\n\n# Notes\n\n- n\n")

    def test_subheadings_stay_in_description(self):
        """Test level-2 headings are plain content."""
        content = parse_content("## Intro\n\nText\n\n# Preparation\n\n1. s\n\n# Notes\n\n- n\n")
        assert content.description.to_text() == "## Intro\n\nText"

    def test_steps_must_be_ordered(self):
        """Test a bullet list of steps is rejected."""
        with pytest.raises(InvalidStepsShapeError):
            parse_content("# Preparation\n\n- s\n\n# Notes\n\n- n\n")

    def test_steps_must_start_at_one(self):
        """Test steps numbered from 2 are rejected."""
        with pytest.raises(InvalidStepsShapeError):
            parse_content("# Preparation\n\n2. s\n\n# Notes\n\n- n\n")

    def test_steps_must_be_only_a_list(self):
        """Test extra content in Preparation is rejected."""
        with pytest.raises(InvalidStepsShapeError):
            parse_content("# Preparation\n\nIntro\n\n1. s\n\n# Notes\n\n- n\n")

    def test_missing_preparation(self):
        """Test a body without Preparation is rejected."""
        with pytest.raises(InvalidStepsShapeError):
            parse_content("Text\n\n# Notes\n\n- n\n")

    def test_notes_must_be_bullets(self):
        """Test ordered notes are rejected."""
        with pytest.raises(InvalidNotesShapeError):
            parse_content("# Preparation\n\n1. s\n\n# Notes\n\n1. n\n")

    def test_missing_notes(self):
        """Test a body without Notes is rejected."""
        with pytest.raises(InvalidNotesShapeError):
            parse_content("# Preparation\n\n1. s\n")

    def test_render_roundtrip(self):
        """Test the rendered body parses back to equal content."""
        content = parse_content(BODY)
        assert RecipeContent.parse(content.render()) == content
        rendered = render_markdown(content.render())
        assert "# Preparation" in rendered
        assert "2. Second." in rendered
        assert "- A note." in rendered

    def test_stamped(self):
        """Test stamping reaches every block."""
        content = parse_content(BODY).stamped(WHEN)
        assert content.modified == WHEN
        assert all(step.modified == WHEN for step in content.steps)


class TestRecipeHeader:
    """Tests for the recipe metadata record."""

    def header_data(self, **overrides):
        data = {
            "name": "Soup",
            "time": "1h 15m",
            "ingredients": ["water 1l", {"name": "salt"}],
            "tools": ["pot"],
            "tags": ["winter"],
        }
        data.update(overrides)
        return data

    def test_from_dict(self):
        """Test a complete header."""
        header = RecipeHeader.from_dict(self.header_data())
        assert header.name.to_text() == "Soup"
        assert header.time == timedelta(hours=1, minutes=15)
        assert header.ingredients[0].quantity == Exact(1.0, "l")
        assert header.tags == ("winter",)

    def test_missing_field(self):
        """Test every field is required."""
        data = self.header_data()
        del data["tools"]
        with pytest.raises(MetadataSchemaError) as exc_info:
            RecipeHeader.from_dict(data)
        assert "tools" in str(exc_info.value)

    def test_bad_time(self):
        """Test an invalid duration is a schema error."""
        with pytest.raises(MetadataSchemaError):
            RecipeHeader.from_dict(self.header_data(time="a while"))

    def test_bad_ingredient_has_context(self):
        """Test ingredient errors name the ingredient."""
        with pytest.raises(EmptyIngredientNameError) as exc_info:
            RecipeHeader.from_dict(self.header_data(ingredients=["flour", "   "]))
        assert "While parsing ingredient 2" in str(exc_info.value)

    def test_to_dict(self):
        """Test the header encodes back to its mapping form."""
        data = RecipeHeader.from_dict(self.header_data()).to_dict()
        assert data["time"] == "1h 15m"
        assert data["ingredients"] == [
            {"name": "water", "quantity": {"value": 1.0, "unit": "l"}},
            {"name": "salt"},
        ]


class TestRecipe:
    """Tests for the Recipe record."""

    def test_parse(self, pasta_text):
        """Test a complete recipe file."""
        recipe = Recipe.parse(parse_markdown(pasta_text))
        assert recipe.name.to_text() == "Pasta al pomodoro"
        assert recipe.duration == timedelta(minutes=30)
        assert len(recipe.ingredients) == 4
        assert recipe.ingredients[2].optional
        assert recipe.tools[1].to_text() == "*large* pan"
        assert recipe.tags == ("pasta", "quick")
        assert recipe.description.to_text() == "A quick summer pasta."
        assert recipe.steps[1].to_text() == "Cook the **spaghetti**."
        assert recipe.modified is None

    def test_parse_without_metadata(self):
        """Test a recipe needs its header."""
        with pytest.raises(MissingMetadataError):
            Recipe.parse(parse_markdown(BODY))

    def test_render_roundtrip(self, pasta_text):
        """Test a rendered recipe parses back to an equal recipe."""
        recipe = Recipe.parse(parse_markdown(pasta_text))
        assert Recipe.parse(recipe.render()) == recipe
        assert Recipe.parse(parse_markdown(render_markdown(recipe.render()))) == recipe

    def test_document_conversion(self, pasta_text):
        """Test conversion through the headed document."""
        recipe = Recipe.parse(parse_markdown(pasta_text))
        document = recipe.to_document()
        assert isinstance(document, RecipeDocument)
        assert Recipe.from_document(document) == recipe

    def test_stamped(self, pasta_text):
        """Test the recipe freshness is the freshness of its file."""
        recipe = Recipe.parse(parse_markdown(pasta_text)).stamped(WHEN)
        assert recipe.modified == WHEN
        assert recipe.description.modified == WHEN
        assert list(recipe.iter_modified()) == [WHEN]

    def test_to_dict(self, bread_text):
        """Test the plain-data form."""
        data = Recipe.parse(parse_markdown(bread_text)).to_dict()
        assert list(data) == ["name", "time", "ingredients", "tools", "tags", "description", "steps", "notes"]
        assert data["time"] == timedelta(hours=3, minutes=30)
