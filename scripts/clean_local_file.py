#!/usr/bin/env python3
"""Utility script to run the text pipeline over a local file.

This script:
1. Reads raw_response.txt from the project root (or the path given)
2. Processes it with TextPipelineService and RendererService
3. Saves the cleaned markdown and HTML next to it as cleaned_result.md
"""
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add parent directory to path to import services
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.renderer_service import RendererService
from services.text_pipeline import TextPipelineService


def main():
    """Main execution function."""
    # Define file paths
    project_root = Path(__file__).parent.parent
    input_file = Path(sys.argv[1]) if len(sys.argv) > 1 else project_root / "raw_response.txt"
    output_file = input_file.parent / "cleaned_result.md"

    # Check if input file exists
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}")
        sys.exit(1)

    print(f"Reading raw text from: {input_file}")

    with open(input_file, 'r', encoding='utf-8') as f:
        raw_text = f.read()

    print(f"Raw text length: {len(raw_text)} characters")
    print("Processing with TextPipelineService...")

    pipeline = TextPipelineService()
    renderer = RendererService()
    cleaned_text = pipeline.reconstruct(raw_text)
    html = renderer.render_markup(cleaned_text)
    reveal = renderer.plan_reveal(cleaned_text)

    print("✓ Processing complete!")

    markdown_output = f"""# Text Reconstruction Results

## Cleaned Text

{cleaned_text}

---

## Rendered HTML

```html
{html}
```

---

## Original Text (for comparison)

{raw_text}
"""

    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(markdown_output)

    print(f"✓ Results saved to: {output_file}")
    print(f"Cleaned text length: {len(cleaned_text)} characters")
    print(f"Changed: {cleaned_text != raw_text}")
    print(f"Reveal chunks: {len(reveal.chunks)} ({reveal.duration_ms}ms)")


if __name__ == "__main__":
    main()
