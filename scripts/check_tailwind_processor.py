#!/usr/bin/env python3
"""
Run the Tailwind processor on a small HTML document and print the result.

Usage:
    python scripts/check_tailwind_processor.py
    python scripts/check_tailwind_processor.py --file page.html --primary "#ef4444"
    python scripts/check_tailwind_processor.py --classes-only
"""

import argparse
import sys

from landing_builder.services.rendering.tailwind import TailwindProcessor

SAMPLE_HTML = """
<html>
  <head><title>Test</title></head>
  <body>
    <div class="p-4 bg-blue-500 text-white rounded-lg shadow-md">
      <h1 class="text-2xl font-bold mb-4 md:text-4xl">Test Content</h1>
      <p class="text-lg">This is a test with Tailwind classes.</p>
      <a class="px-6 py-3 bg-primary text-white hover:opacity-90">Buy</a>
    </div>
  </body>
</html>
"""


def main():
    parser = argparse.ArgumentParser(description="Check Tailwind class extraction and CSS generation")
    parser.add_argument("--file", help="HTML file to process instead of the built-in sample")
    parser.add_argument("--primary", default="#3b82f6", help="Theme primary color")
    parser.add_argument("--secondary", default="#f3f4f6", help="Theme secondary color")
    parser.add_argument("--background", default="#ffffff", help="Theme background color")
    parser.add_argument("--classes-only", action="store_true", help="Only print the extracted classes")
    args = parser.parse_args()

    if args.file:
        with open(args.file, encoding="utf-8") as f:
            html = f.read()
    else:
        html = SAMPLE_HTML

    theme = {
        "primaryColor": args.primary,
        "secondaryColor": args.secondary,
        "backgroundColor": args.background,
    }

    processor = TailwindProcessor()
    classes = processor.extract_classes(html)
    print(f"Extracted {len(classes)} classes:")
    print("  " + " ".join(classes))
    if args.classes_only:
        return 0

    unknown = [c for c in classes if processor.css_for_class(c) is None]
    if unknown:
        print(f"\nNo rule for: {' '.join(unknown)}")

    print("\nProcessed HTML:")
    print(processor.process_html(html, theme))
    return 0


if __name__ == "__main__":
    sys.exit(main())
