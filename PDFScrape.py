"""
PDFScrape: Best-effort PDF text extraction (from-scratch lexical scanner, no pdfminer, no PyPDF2)

Usage:
    python PDFScrape.py -f [input file path]
    python PDFScrape.py -i [input folder path]
Options:
    -f, --file        Extract text from a single PDF file.
    -i, --input       Extract text from all PDF files in a folder.
    -o, --output      Output directory for the text files (default: ./output)
    -c, --concat      Concatenate all extracted text into a single file.
    -m, --max-length  Maximum characters kept per document (overrides PDFSCRAPE_MAX_TEXT_LENGTH)
    -w, --workers     Files parsed in parallel in folder mode (default: 4)
    -v, --verbose     Log every extraction stage.

Heuristic thresholds can also be set through PDFSCRAPE_* environment
variables or a .env file, see pdfscrape/config.py.
"""

import os
import sys
import logging
import argparse
import concurrent.futures
from tqdm import tqdm
from typing import Optional
from pdfscrape.utils import logger
from pdfscrape.config import ExtractionConfig
from pdfscrape.extractor import extract_file, ExtractionResult
from pdfscrape.writer import format_result, format_document

CONFIG: Optional[ExtractionConfig] = None

def process_pdf(pdf_path: str) -> ExtractionResult:
    result = extract_file(pdf_path, config=CONFIG)
    if not result.ok:
        logger.error(f'Failed to process {pdf_path}: {result.message}')
    return result

def _write(path: str, text: str):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)

# File/Folder Handling
def convert_file(pdf_path: str, out_path: str) -> bool:
    logger.info(f'Extracting {pdf_path} -> {out_path}')
    result = process_pdf(pdf_path)
    if not result.ok:
        logger.error(f'No output for {pdf_path}')
        return False
    _write(out_path, format_result(result))
    logger.info(f'Success: {pdf_path}')
    return True

def convert_folder(input_dir: str, output_dir: str, concat: bool = False, workers: int = 4) -> bool:
    pdf_files = sorted(f for f in os.listdir(input_dir) if f.lower().endswith('.pdf'))
    os.makedirs(output_dir, exist_ok=True)
    results = {}
    # Each parse is independent, so files can run side by side
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futs = {executor.submit(process_pdf, os.path.join(input_dir, f)): f for f in pdf_files}
        pbar = tqdm(concurrent.futures.as_completed(futs), total=len(futs), desc='Extracting PDFs', unit='file')
        for fut in pbar:
            results[futs[fut]] = fut.result()
    all_ok = True
    sections = []
    for pdf_file in pdf_files:
        result = results[pdf_file]
        if result.ok:
            out_path = os.path.join(output_dir, os.path.splitext(pdf_file)[0] + '.txt')
            _write(out_path, format_result(result))
        else:
            all_ok = False
            logger.error(f'No output for {pdf_file}')
        if concat:
            sections.append(format_document(pdf_file, result))
    if concat and sections:
        concat_path = os.path.join(output_dir, 'concatenated.txt')
        _write(concat_path, '\n\n'.join(sections))
        logger.info(f'Concatenated text written to {concat_path}')
    return all_ok

# CLI interaction and interpretation
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='PDFScrape: Best-effort PDF text extraction')
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('-f', '--file', help='Extract text from a single PDF file')
    group.add_argument('-i', '--input', help='Extract text from all PDF files in a folder')
    parser.add_argument('-o', '--output', help='Output directory for text files (default: ./output)', default='output')
    parser.add_argument('-c', '--concat', action='store_true', help='Concatenate all extracted text into a single file')
    parser.add_argument('-m', '--max-length', type=int, help='Maximum characters kept per document')
    parser.add_argument('-w', '--workers', type=int, default=4, help='Files parsed in parallel in folder mode')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log every extraction stage')
    args = parser.parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)
    if args.workers < 1:
        parser.error('--workers must be at least 1')
    global CONFIG
    try:
        CONFIG = ExtractionConfig.from_env()
        if args.max_length is not None:
            CONFIG = CONFIG.replace(max_text_length=args.max_length)
    except ValueError as e:
        parser.error(str(e))
    if args.file:
        os.makedirs(args.output, exist_ok=True)
        base = os.path.splitext(os.path.basename(args.file))[0]
        ok = convert_file(args.file, os.path.join(args.output, base + '.txt'))
    else:
        if not os.path.isdir(args.input):
            parser.error(f'Not a directory: {args.input}')
        ok = convert_folder(args.input, args.output, args.concat, workers=args.workers)
    return 0 if ok else 1

if __name__ == '__main__':
    sys.exit(main())
