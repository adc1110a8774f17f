"""Tests for utils.llm.parse_files — path-annotated fenced blocks."""

from utils.llm import parse_files


def test_single_block():
    response = "```tsx:src/components/Hero.tsx\nexport default function Hero() {}\n```"
    assert parse_files(response) == [("src/components/Hero.tsx", "export default function Hero() {}")]


def test_multiple_blocks_keep_order():
    response = (
        "Here you go:\n\n"
        "```tsx:src/App.tsx\nconst App = () => null;\n```\n\n"
        "```css:src/index.css\nbody { margin: 0; }\n```\n"
    )
    result = parse_files(response)
    assert [p for p, _ in result] == ["src/App.tsx", "src/index.css"]
    assert result[1][1] == "body { margin: 0; }"


def test_leading_slash_stripped():
    response = "```tsx:/src/pages/Index.tsx\nexport default function Index() {}\n```"
    assert parse_files(response)[0][0] == "src/pages/Index.tsx"


def test_path_whitespace_trimmed():
    response = "```tsx: src/pages/About.tsx \nexport default function About() {}\n```"
    assert parse_files(response)[0][0] == "src/pages/About.tsx"


def test_body_trimmed():
    response = "```ts:src/lib/utils.ts\n\n\nexport const x = 1;\n\n```"
    assert parse_files(response)[0][1] == "export const x = 1;"


def test_missing_language_tag():
    response = "```:src/lib/utils.ts\nexport const x = 1;\n```"
    assert parse_files(response) == [("src/lib/utils.ts", "export const x = 1;")]


def test_path_without_directory_skipped():
    response = "```tsx:Hero.tsx\nexport default function Hero() {}\n```"
    assert parse_files(response) == []


def test_plain_fence_ignored():
    response = "```tsx\nexport default function Hero() {}\n```"
    assert parse_files(response) == []


def test_empty_and_none():
    assert parse_files("") == []
    assert parse_files(None) == []


def test_template_literals_survive():
    body = "const cls = `px-4 ${active ? 'text-white' : 'text-zinc-400'}`;"
    response = f"```tsx:src/components/Tab.tsx\n{body}\n```"
    assert parse_files(response)[0][1] == body


def test_dot_segments_normalized():
    response = "```tsx:src/./components/../pages/About.tsx\nexport default function About() {}\n```"
    assert parse_files(response)[0][0] == "src/pages/About.tsx"


def test_paths_collapsing_to_root_or_above_skipped():
    response = (
        "```json:src/../package.json\n{}\n```\n"
        "```tsx:src/../../../evil.tsx\nexport {}\n```\n"
        "```ts:./vite.config.ts\nexport default {}\n```"
    )
    assert parse_files(response) == []
