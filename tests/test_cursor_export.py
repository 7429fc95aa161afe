from prompt_builder import cursor_export, splitter
from prompt_builder.models import Journey, ProjectData


class TestGenerateCursorPrompt:
    def test_structure(self, product_data):
        prompt = cursor_export.generate_cursor_prompt(product_data)
        assert prompt.startswith("# App Implementation Request")
        assert "**App Name:** Smart Checkout" in prompt
        assert "### Feature 1: Express Pay" in prompt
        assert "**Tone/UX:** Reassuring" in prompt
        assert "- **Platform:** Mobile App (React Native or native)" in prompt
        assert prompt.endswith("After reviewing the plan, I will confirm and you can begin implementation.")

    def test_skips_empty_journeys(self):
        data = ProjectData(journeys=[Journey(), Journey(when="Nightly")])
        prompt = cursor_export.generate_cursor_prompt(data)
        assert "### Feature 1" not in prompt
        assert "### Feature 2: Unnamed Journey" in prompt

    def test_optional_sections(self, empty_data):
        prompt = cursor_export.generate_cursor_prompt(empty_data)
        assert "## Design Principle" not in prompt
        assert "## Additional Screens/Pages" not in prompt
        assert "[Problem to solve]" in prompt

    def test_accessibility_requirements(self, empty_data):
        prompt = cursor_export.generate_cursor_prompt(empty_data)
        assert "- All text must meet WCAG AA contrast requirements (4.5:1 for body, 3:1 for large text)" in prompt
        assert "- Minimum text size: 14px for body, 16px recommended" in prompt

    def test_blank_states_omitted(self):
        prompt = cursor_export.generate_cursor_prompt(ProjectData(states_needed=["", " "]))
        assert "UI States to Handle" not in prompt

    def test_splits_on_sections(self, product_data):
        prompt = cursor_export.generate_cursor_prompt(product_data)
        assert len(splitter.split_by_sections(prompt)) > 5


class TestSafeFilename:
    def test_slug(self):
        assert cursor_export.safe_filename(ProjectData(feature_name="Smart Checkout 2.0!")) == "smart-checkout-2-0"

    def test_fallback(self):
        assert cursor_export.safe_filename(ProjectData()) == "design-prompt"
        assert cursor_export.safe_filename(ProjectData(feature_name="!!!")) == "design-prompt"

    def test_truncated(self):
        assert len(cursor_export.safe_filename(ProjectData(feature_name="a" * 80))) == 50
