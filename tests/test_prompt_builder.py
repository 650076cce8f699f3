from backend.prompt_builder import HEADSHOT_TEMPLATE, INSTRUCTIONS_PREFIX, build_headshot_prompt


def test_prompt_is_deterministic():
    assert build_headshot_prompt("Wear a black suit") == build_headshot_prompt("Wear a black suit")
    assert build_headshot_prompt("") == build_headshot_prompt("")


def test_empty_instructions_add_no_clause():
    for value in (None, "", "   \n"):
        prompt = build_headshot_prompt(value)
        assert prompt == HEADSHOT_TEMPLATE
        assert INSTRUCTIONS_PREFIX not in prompt


def test_instructions_are_embedded_verbatim():
    text = '  Blue "tie", blurred office  '
    prompt = build_headshot_prompt(text)

    assert prompt.startswith(HEADSHOT_TEMPLATE)
    assert prompt.endswith(f'{INSTRUCTIONS_PREFIX} "{text}"')


def test_template_covers_studio_requirements():
    template = HEADSHOT_TEMPLATE.lower()
    for phrase in ("lighting", "background", "centered", "realistic", "watermarks"):
        assert phrase in template
