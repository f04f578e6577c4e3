#!/usr/bin/env python3
"""Utility script to run TranscriptCleaner over a local transcript file.

This script:
1. Reads raw_transcript.txt from the project root (or the path given)
2. Cleans it with TranscriptCleaner using the environment configuration
3. Saves formatted results to cleaned_result.md

Usage:
    python scripts/clean_local_file.py [INPUT_FILE] [OUTPUT_FILE]
"""
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add parent directory to path to import services
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.transcript_cleaner import TranscriptCleaner


def format_report(raw_transcript: str, result) -> str:
    """Render a cleaning result as a Markdown report."""
    return f"""# Cleaned Transcript Results

## Statistics

- Word count: {result.word_count}
- Estimated duration: {result.estimated_duration}
- Original length: {result.original_length} characters

## Cleaned Transcript

{result.cleaned_text or '*No caption text found*'}

---

## Original Transcript (for comparison)

{raw_transcript}
"""


def main():
    """Main execution function."""
    project_root = Path(__file__).parent.parent
    input_file = Path(sys.argv[1]) if len(sys.argv) > 1 else project_root / "raw_transcript.txt"
    output_file = Path(sys.argv[2]) if len(sys.argv) > 2 else project_root / "cleaned_result.md"

    # Check if input file exists
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}")
        sys.exit(1)

    print(f"Reading transcript from: {input_file}")

    # newline="" keeps \r\n and \r intact so original_length matches the file
    with open(input_file, 'r', encoding='utf-8', newline='') as f:
        raw_transcript = f.read()

    print(f"Transcript length: {len(raw_transcript)} characters")
    print("Processing with TranscriptCleaner...")

    try:
        cleaner = TranscriptCleaner()
    except ValueError as e:
        print(f"Error: invalid cleaner configuration: {e}")
        sys.exit(1)

    result = cleaner.clean(raw_transcript)
    print("✓ Processing complete!")

    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(format_report(raw_transcript, result))

    print(f"✓ Results saved to: {output_file}")
    print(f"\nCleaned preview: {result.cleaned_text[:100]}...")
    print(f"Word count: {result.word_count}")
    print(f"Estimated duration: {result.estimated_duration}")


if __name__ == "__main__":
    main()
