"""
Debug script to see what Document AI detected and how it was parsed.

Usage:
    python scripts/debug_receipt.py receipt.jpg
    python scripts/debug_receipt.py --entities saved_document.json
"""

import argparse
import json
import mimetypes
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from expense_scan.models.receipt import RecognizedDocument
from expense_scan.services.expense import ExpenseService
from expense_scan.services.parser import ReceiptParser
from expense_scan.utils.scoring import confidence_level


def main():
    parser_args = argparse.ArgumentParser(description='Run one receipt through recognition and parsing')
    parser_args.add_argument('image', nargs='?', type=str,
                             help='Receipt image to send to Document AI')
    parser_args.add_argument('--entities', '-e', type=str,
                             help='Saved document JSON ({"entities": [...]}); skips Document AI')
    parser_args.add_argument('--mime-type', '-m', type=str,
                             help='MIME type override (guessed from file name otherwise)')
    args = parser_args.parse_args()

    if not args.image and not args.entities:
        parser_args.error("pass an image path or --entities")

    parser = ReceiptParser()

    if args.entities:
        document = RecognizedDocument.model_validate(json.loads(Path(args.entities).read_text()))
        receipt = parser.parse_document(document)
    else:
        image_path = Path(args.image)
        mime_type = args.mime_type or mimetypes.guess_type(image_path.name)[0] or 'image/jpeg'
        document, receipt = ExpenseService(parser=parser).parse_receipt(image_path.read_bytes(), mime_type)

    print("=" * 60)
    print("DETECTED ENTITIES:")
    print("=" * 60)
    for entity in document.entities or []:
        print(f"  {str(entity.type):<24} {entity.confidence or 0:.2f}  {entity.mention_text!r}")
        for prop in entity.properties:
            print(f"    {str(prop.type):<22} {prop.mention_text!r}")

    print("\n" + "=" * 60)
    print("PARSED RECEIPT:")
    print("=" * 60)
    print(json.dumps(receipt.model_dump(), indent=2))

    print("\nConfidence:")
    for field, score in receipt.confidence_scores.items():
        print(f"  {field:<16} {score:.2f} ({confidence_level(score)})")

    reasons = parser.review_reasons(receipt)
    print(f"\nNeeds review: {'yes - ' + '; '.join(reasons) if reasons else 'no'}")


if __name__ == '__main__':
    main()
