"""DialScript reference text: served by the CLI, the REST API and the MCP server."""

from __future__ import annotations

EXAMPLE_SCRIPT = """\
[Scene.1]
Level: 1
Location: Forest
Characters: Alan, Beth

// Main dialog
[Dialog.1]
Alan: Hello there! {Emotion: happy}
Beth: Hi Alan, nice to see you.
Alan: Want to go for a walk?
Beth: Sure! {Choices: 1, 2}
Alan: Great, let's go! {Choice: 1}
Alan: Maybe next time then. {Choice: 2}
"""

DIALSCRIPT_REFERENCE = f"""\
# DialScript Reference

DialScript is a line-oriented screenplay format. Files use the `.ds` extension.
Every line is exactly one of the kinds below.

## 1. Scene header

`[Scene.N]` opens a scene. `N` must be a positive integer. A new scene header
closes the previous scene.

## 2. Declarations, once per scene, before the first dialog block

```
Level: 1
Location: Forest
Characters: Alan, Beth
```

- `Level:`, `Location:` and `Characters:` are case-sensitive and must start the line.
- Each declaration may appear only once per scene and must have a value.
- `Characters:` is a comma-separated list; dialog lines may only use these names.

## 3. Dialog header

`[Dialog.N]` opens a dialog block inside the current scene. `N` must be positive.

## 4. Dialog lines

`Name: Text {{metadata}}`

- A single space follows the colon.
- The name and the text must both be non-empty.
- An optional `{{...}}` metadata block goes at the very end of the line.
- No empty lines between dialog lines of the same block.

## 5. Comments and blank lines

Lines starting with `//` are comments. Blank lines are allowed outside dialog
blocks and just before a comment or a new header.

## Auto-fix

The fixer repairs misspelled headers (`[Scna.1]`), misspelled declaration
keywords (`Levl:`, `location:`), a missing space after the colon, metadata
placed before the end of the line, and character names one typo away from a
declared character.

## Example

```
{EXAMPLE_SCRIPT}```
"""
