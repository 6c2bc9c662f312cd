"""Prompt construction for classification and component generation."""

from component_ingest.ai.references import ExampleComponent
from component_ingest.catalog.kinds import ComponentKind
from component_ingest.models import ScrapedContent
from component_ingest.utils.text_utils import truncate

CONTENT_PREVIEW_CHARS = 8000
MAX_PROMPT_FILES = 10
MAX_PROMPT_DIRS = 5
MAX_PROMPT_CODE_BLOCKS = 3
CODE_BLOCK_PREVIEW_CHARS = 500
SCRAPED_CONTENT_CHARS = 5000

_ANALYSIS_SCHEMA = """{
  "suggestedComponentType": "agents|commands|mcps|settings|hooks|skills",
  "confidence": 0.0-1.0,
  "suggestedCategory": "category-name (e.g., development-team, security, testing)",
  "suggestedName": "component-name (lowercase, hyphens, max 64 chars)",
  "extractedMetadata": {
    "description": "Brief description (max 1024 chars for skills)",
    "purpose": "What this component does",
    "features": ["feature1", "feature2", ...],
    "tools": ["Read", "Write", ...] (for agents/commands only),
    "model": "sonnet|haiku|opus" (for agents only, optional)
  },
  "repositoryInsights": {
    "relevantFiles": ["path/to/file1", ...],
    "componentStructure": "description of how components are organized",
    "dependencies": ["dependency1", ...]
  },
  "validation": {
    "dataQuality": "high|medium|low",
    "missingFields": ["field1", ...],
    "recommendations": ["recommendation1", ...],
    "warnings": ["warning1", ...]
  },
  "reasoning": "Brief explanation of why these suggestions were made"
}"""

_ANALYSIS_GUIDELINES = """## Guidelines:

1. **Component Type Detection:**
   - "agents" if it's an AI specialist/subagent
   - "commands" if it's a slash command
   - "mcps" if it's an MCP server configuration
   - "settings" if it's a Claude Code setting
   - "hooks" if it's a hook configuration
   - "skills" if it's a Skill/modular capability

2. **Name Generation:**
   - Use lowercase letters, numbers, and hyphens only
   - Max 64 characters
   - Descriptive and clear
   - Follow kebab-case convention

3. **Category Selection:**
   - Use existing categories when possible (development-team, security, testing, etc.)
   - Suggest new category only if none fit

4. **Description:**
   - For skills: max 1024 characters, include both what it does AND when to use it
   - For others: concise but informative

5. **Validation:**
   - Check if content has enough information
   - Identify missing required fields
   - Provide recommendations for improvement"""

_COMPONENT_OVERVIEW = """
## Skills Documentation Reference

Skills are modular capabilities that extend Claude's functionality. Key requirements:

1. **SKILL.md Structure**:
   - Must have YAML frontmatter with `name` and `description`
   - Description should be specific and include when to use the skill
   - Use imperative/infinitive form (verb-first instructions)
   - Include clear examples

2. **Best Practices**:
   - Keep Skills focused on one capability
   - Write clear descriptions with specific triggers
   - Include both what the Skill does and when to use it
   - Use progressive disclosure for complex content

3. **Component Types**:
   - Agents: AI specialists with expertise areas
   - Commands: Slash commands with clear usage
   - MCPs: Model Context Protocol server configurations
   - Settings: Claude Code configuration settings
   - Hooks: Automation triggers
   - Skills: Modular capabilities with SKILL.md files
"""


def _repository_context(content: ScrapedContent) -> str:
    repository = content.metadata.repository
    if repository is None:
        return ""

    lines = [f"Repository: {repository.owner}/{repository.name}"]
    structure = content.metadata.repo_structure or []
    if structure:
        files = [e.path for e in structure if e.type == "file"][:MAX_PROMPT_FILES]
        dirs = [e.path for e in structure if e.type == "directory"][:MAX_PROMPT_DIRS]
        lines.append("Repository Structure:")
        if dirs:
            lines.append(f"Directories: {', '.join(dirs)}")
        if files:
            lines.append(f"Files: {', '.join(files)}")
    return "\n".join(lines)


def _code_context(content: ScrapedContent) -> str:
    if not content.code_blocks:
        return ""

    parts = [f"Code Blocks Found ({len(content.code_blocks)}):"]
    for i, block in enumerate(content.code_blocks[:MAX_PROMPT_CODE_BLOCKS], start=1):
        parts.append(
            f"--- Code Block {i} ({block.language}) ---\n"
            f"{truncate(block.content, CODE_BLOCK_PREVIEW_CHARS)}"
        )
    return "\n\n".join(parts)


def build_classification_prompt(content: ScrapedContent, docs: dict[str, str]) -> str:
    """Prompt asking the model for a single JSON analysis object."""
    return f"""You are an expert at analyzing content and extracting Claude Code component information.

## Claude Code Component Documentation:

### Agents (Subagents):
{docs.get("subagents", "N/A")}

### Skills:
{docs.get("skills", "N/A")}

### MCPs:
{docs.get("mcp", "N/A")}

### Hooks:
{docs.get("hooks", "N/A")}

## Scraped Content to Analyze:

**URL:** {content.metadata.url}
**Title:** {content.title}
**Description:** {content.description}
{_repository_context(content)}
{_code_context(content)}

**Content Preview:**
{truncate(content.content, CONTENT_PREVIEW_CHARS)}

## Your Task:

Analyze the scraped content and extract Claude Code component information. Return a JSON object with the following structure:

{_ANALYSIS_SCHEMA}

{_ANALYSIS_GUIDELINES}

Return ONLY valid JSON, no markdown formatting or code blocks."""


def build_generation_prompt(
    kind: ComponentKind,
    *,
    name: str,
    category: str,
    description: str,
    examples: list[ExampleComponent],
    best_practices: str = "",
    scraped_content: str | None = None,
    documentation_url: str | None = None,
) -> str:
    """Prompt asking the model for the literal body of one component."""
    component_type = kind.type.value

    sections = [
        f"You are an expert at creating Claude Code components. Generate a high-quality "
        f"{component_type} component based on the following requirements.",
        "## Requirements:\n"
        f"- Component Type: {component_type}\n"
        f"- Name: {name}\n"
        f"- Category: {category}\n"
        f"- Description: {description}",
        f"## Reference Documentation:\n{_COMPONENT_OVERVIEW}",
    ]
    if best_practices:
        sections.append(f"## Best Practices:\n{best_practices}")
    if examples:
        rendered = "\n".join(
            f"\n### {ex.category}/{ex.name}\n```\n{ex.content}\n```" for ex in examples
        )
        sections.append(f"## Example {component_type}:\n{rendered}")
    if scraped_content:
        sections.append(
            f"## Scraped Content from {documentation_url or 'URL'}:\n"
            f"{truncate(scraped_content, SCRAPED_CONTENT_CHARS)}"
        )

    sections.append(
        f"""## Your Task:

Generate a complete, production-ready {component_type} component that:

1. Follows Claude Code best practices and conventions
2. Matches the style and structure of the examples provided
3. Includes all necessary metadata and frontmatter
4. Has clear, specific instructions
5. Includes practical examples
6. Is ready to use immediately

For {component_type}:
{kind.authoring_instructions}

Return ONLY the complete component content, ready to save as a file. Do not include explanations or markdown code blocks around it."""
    )
    return "\n\n".join(sections)
