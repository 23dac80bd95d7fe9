"""Static content bundled with the adapters.

The bundled commands exist in two dialects: tools with a structured question
prompt (``ask``) and tools that read a numbered choice from plain text
(``text``). Both dialects are rendered from the same sources so the steps stay
in sync.

The review command is different: its body is rendered against the live expert
list on every sync (see render_review_command).
"""

from typing import Dict, Sequence

from council.core.rendering import render
from council.experts.expert import Expert

CHOICE_ASK = "ask"
CHOICE_TEXT = "text"

# =============================================================================
# Install docs
# =============================================================================

INSTALL_DOC = """# Install Council

{{ intro }}

## Quick Start

1. Check if council is already initialized:
```bash
ls -la .council/
```

2. If not initialized, run:
```bash
council init
```

3. Add experts to your council - use one of:
   - `/council-add` - suggest and create an expert with your AI tool
   - write `.council/experts/{id}.md` by hand (YAML frontmatter with `id`, `name`, `focus`)

4. Sync to your AI tool:
```bash
council sync
```
"""

GENERIC_INSTALL_DOC = """# Install Council

Set up the council for your project.

## Quick Start

1. Initialize the council:
```bash
council init
```

2. Add experts to your council by creating one file per expert in
`.council/experts/`, for example `.council/experts/kent-beck.md`:
```markdown
---
id: kent-beck
name: Kent Beck
focus: Test-driven development
---
```

3. Sync to generate AGENTS.md:
```bash
council sync
```

The AGENTS.md file will be created in your project root.
AI tools that support the AGENTS.md convention will use these expert personas.
"""

# =============================================================================
# Bundled commands
# =============================================================================

_ADD_COMMAND = """# Add Expert to Council

Add a new expert to the council: $ARGUMENTS

## Step 1: Classify Input

Determine what type of input $ARGUMENTS is:

- **Name**: Quoted string, or 2-3 capitalized words forming a person's name (e.g., "Kent Beck", Sandi Metz)
- **Description**: Contains "a ", "someone", "expert in", "help with" (e.g., "a testing expert")
- **Keyword**: Single word describing a domain (e.g., "testing", "APIs")

**If ambiguous, treat as description.**

## Step 2: Check the Current Council

See who is already in the council:
```bash
council list --json
```

Avoid suggesting experts already in the council.

## Step 3: Build 4 Suggestions (Rule of 4)

Always present exactly 4 options.

- **Name given**: slot 1 is that person, slots 2-3 are well-known experts in the same domain, slot 4 is "Custom"
- **Description or keyword**: slots 1-3 are well-known experts in the domain, slot 4 is "Custom"

## Step 4: Present Options

{% if choices == "ask" %}
Use **AskUserQuestion** to present the options:

| Label | Description |
|-------|-------------|
| "{Name}" | {brief expertise} |
| "{Name}" | {brief expertise} |
| "{Name}" | {brief expertise} |
| "Custom" | Create a persona matching your description |
{% else %}
Present the options as a numbered list and wait for the user's answer:

```
Based on your request, here are 4 options:

1. {Name} - {brief expertise}
2. {Name} - {brief expertise}
3. {Name} - {brief expertise}
4. Custom - Create a persona matching your description

Which option? (1/2/3/4):
```
{% endif %}

When the user selects:
- **A named expert**: Proceed to Step 5 to generate their profile
- **Custom**: Ask for any additional details, then proceed to Step 5

## Step 5: Generate Custom Profile

Generate a rich profile:

1. **Philosophy** (2-4 sentences): What they believe about software/design. Write in first person.
2. **Principles** (4-6 items): Concrete, actionable guidelines they're known for.
3. **Red Flags** (3-5 items): Patterns they would call out during code review.

Create the expert file at `.council/experts/{id}.md` (the id is lowercase letters and digits joined by single hyphens, e.g. `kent-beck`):

```markdown
---
id: {kebab-case-id}
name: {Full Name}
focus: {focus area}
philosophy: |
  {philosophy text}
principles:
  - {principle 1}
  - {principle 2}
red_flags:
  - {red flag 1}
  - {red flag 2}
---

# {Name} - {focus}

You are channeling {Name}, known for expertise in {focus}.
```

## After Creating

1. Run `council sync` to update AI tool configurations
2. Confirm creation with: "Added {Name} ({id}) to the council"
3. Show the file path
"""

_DETECT_COMMAND = """# Detect Stack and Suggest Experts

Analyze this codebase and suggest council experts.

## Step 1: Inspect the Project

Read the manifest and lock files at the project root (for example
`package.json`, `go.mod`, `pyproject.toml`, `Gemfile`, `Cargo.toml`) and skim
the directory layout.

## Step 2: Analyze Results

Supplement what you found with your codebase knowledge:

1. **Languages**: What's the primary language?
2. **Frameworks**: What frameworks are detected?
3. **Testing**: What testing tools/approaches are in use?
4. **Domain**: What problem domain does this project address?

## Step 3: Suggest Experts

Suggest **3-5 experts** (maximum 7). Each expert fills a unique role; prefer
direct stack matches over general wisdom. For each one give the name, the focus
relevant to THIS project, and one sentence on why.

## After Analysis

{% if choices == "ask" %}
Use **AskUserQuestion** to ask which experts to add.
{% else %}
Ask the user which experts to add by number, or "all".
{% endif %}
Add each chosen expert with `/council-add "{Name}"`, then run `council sync`.
"""

_REMOVE_COMMAND = """# Remove Expert from Council

Remove an expert from the council: $ARGUMENTS

## Step 1: Identify the Expert

Parse the arguments to get the expert name or ID. If not provided, list current experts:

```bash
council list
```

{% if choices == "ask" %}
Then use **AskUserQuestion** to ask which expert to remove.
{% else %}
Then ask the user which expert to remove.
{% endif %}

## Step 2: Remove the Expert

```bash
council remove {expert-id}
```

## Step 3: Sync Changes

```bash
council sync
```

## After Removing

Confirm with: "Removed {Name} from the council"
"""

_COMMAND_SOURCES = {
    "council-add": _ADD_COMMAND,
    "council-detect": _DETECT_COMMAND,
    "council-remove": _REMOVE_COMMAND,
}

# =============================================================================
# Review command
# =============================================================================

REVIEW_COMMAND_TEMPLATE = """# Code Review Council

Convene the council to review: $ARGUMENTS

## Council Members

{% for expert in experts %}
### {{ expert.name }}
**Focus**: {{ expert.focus }}

{% endfor %}
## Instructions

Review the code from each expert's perspective. For each expert:
1. State the expert's name
2. Provide their assessment focused on their domain
3. Note any concerns or suggestions

At the end, synthesize the key points and provide actionable recommendations.
"""


def render_install_doc(intro: str) -> str:
    return render(INSTALL_DOC, intro=intro)


def render_commands(choices: str) -> Dict[str, str]:
    """Render every bundled command in the given choice dialect."""
    return {name: render(source, choices=choices) for name, source in sorted(_COMMAND_SOURCES.items())}


def render_review_command(experts: Sequence[Expert], template: str = REVIEW_COMMAND_TEMPLATE) -> str:
    """Render the review command body for the current council membership."""
    return render(template, experts=list(experts))
