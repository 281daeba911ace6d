#!/usr/bin/env python3
"""
Genomic Text Mutator - Main CLI

Applies genomic-style mutations (nucleotide transitions, indels, linked
haplotypes) to the text of a file.

The pipeline:
1. Build the engine for the requested mode (and population)
2. Optionally print or plot the transition matrix
3. Mutate the text as a whole, or line by line with --preserve
4. Write the result to the output file or print it
5. Optionally write a word divergence report

Usage:
    python main.py input.txt
    python main.py -m multilingual -p yoruba input.txt output.txt
"""

import argparse
import sys
from pathlib import Path

from mutation_engine import MutationConfig, create_engine, mutate_lines
from mutation_engine.mutation_types import EngineMode, DEFAULT_POPULATION
from analysis import word_divergence_table, summarize_divergence


MODE_BANNERS = {
    EngineMode.DEFAULT: 'Using standard mutation mode',
    EngineMode.PHONETIC: 'Using phonetic mutation mode',
    EngineMode.EPIGENETIC: 'Using epigenetic mutation mode',
    EngineMode.MULTILINGUAL: 'Using multilingual mutation mode with {population} population',
}


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Mutate text with genomic transition rules',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py input.txt                      # Print mutations
    python main.py input.txt output.txt           # Save mutations to file
    python main.py -m phonetic input.txt          # Phonetic mutation mode
    python main.py -m multilingual -p yoruba input.txt
    python main.py -v --heatmap matrix.png input.txt
        """
    )

    parser.add_argument('input_file', help='Text file to mutate')
    parser.add_argument('output_file', nargs='?', default=None,
                        help='Output file (default: print to console)')

    parser.add_argument(
        '--mode', '-m', type=str, default=EngineMode.DEFAULT.value,
        help='Mutation mode: default, phonetic, epigenetic, multilingual (default: default)'
    )

    parser.add_argument(
        '--viz', '-v', action='store_true',
        help='Print the transition matrix'
    )

    parser.add_argument(
        '--population', '-p', type=str, default=DEFAULT_POPULATION,
        help='Population for multilingual mode: yoruba, han, european (default: european)'
    )

    parser.add_argument(
        '--strength', '-s', type=float, default=0.5,
        help='Mutation strength 0.0-1.0 (default: 0.5)'
    )

    parser.add_argument(
        '--preserve', '-P', action='store_true',
        help='Preserve formatting (mutate line by line, keep blank lines)'
    )

    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for reproducibility'
    )

    parser.add_argument(
        '--report', type=str, default=None,
        help='Write a word divergence report (CSV) to this path'
    )

    parser.add_argument(
        '--heatmap', type=str, default=None,
        help='Save a transition matrix heatmap (PNG) to this path'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    input_path = Path(args.input_file)
    if not input_path.exists():
        print(f'Error: Input file "{input_path}" not found.', file=sys.stderr)
        return 1

    try:
        config = MutationConfig(
            mode=args.mode,
            population=args.population,
            strength=args.strength,
            preserve_format=args.preserve,
            seed=args.seed
        )
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    engine, population_ok = create_engine(config)

    mode = config.engine_mode
    population = getattr(engine, 'active_population', config.population)
    print(MODE_BANNERS[mode].format(population=population))
    if mode == EngineMode.MULTILINGUAL and not population_ok:
        print(f'Unknown population "{config.population}", keeping {DEFAULT_POPULATION}')

    if args.viz:
        print('\nTransition Matrix:')
        print(engine.visualize_matrix())

    try:
        if args.heatmap:
            from visualization import plot_transition_heatmap
            plot_transition_heatmap(engine.transition_matrix, args.heatmap)
            print(f'Saved transition heatmap to: {args.heatmap}')

        text = input_path.read_text(encoding='utf-8')

        if config.preserve_format:
            mutated_text = mutate_lines(engine, text)
        else:
            mutated_text = engine.mutate_text(text)

        if args.output_file:
            Path(args.output_file).write_text(mutated_text, encoding='utf-8')
            print(f'Mutated text saved to {args.output_file}')
        else:
            print('\nMutated Text:')
            print('=' * 14)
            print(mutated_text)

        if args.report:
            table = word_divergence_table(text, mutated_text)
            table.to_csv(args.report, index=False)
            summary = summarize_divergence(table)
            print(f'\nSaved divergence report to: {args.report}')
            print(f"Mean word difference: {summary['mean_difference']:.3f}")
            print(f"Unchanged words: {summary['pct_unchanged']:.1f}%")
            print(f"Divergent words: {summary['pct_divergent']:.1f}%")
            print(f"Word count change: {summary['length_delta']:+d}")

    except (OSError, UnicodeDecodeError) as e:
        print(f'Error processing file: {e}', file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
