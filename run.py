#!/usr/bin/env python3
"""
run.py - Main entry point for the Squares game engine
"""

import argparse
import sys
import time

from squares.debug import debug, DebugLevel

# --- Utility Functions ---

def configure_debug(args):
    """Configure debug level based on args.debug or args.debug_level."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.configure(level=DebugLevel[args.debug_level.upper()])
    if args.log_file:
        debug.configure(log_file=args.log_file)

# --- Command Handlers ---

def handle_play(args):
    """Run the interactive console command loop."""
    from squares.game.rules import SquaresGame
    from squares.interfaces.cli import CommandProcessor, SimpleCLI

    processor = CommandProcessor(SquaresGame(seed=args.seed))
    SimpleCLI(processor).run()

def handle_serve(args):
    """Serve the REST adapter with uvicorn."""
    import uvicorn
    from squares.interfaces.api import create_app

    print(f"Serving Squares API on http://{args.host}:{args.port}")
    uvicorn.run(create_app(), host=args.host, port=args.port)

def handle_analyze(args):
    """Load a board snapshot and print the move the engine would play."""
    from squares.exceptions import SquaresError
    from squares.game.rules import SquaresGame
    from squares.utils import format_square

    game = SquaresGame(seed=args.seed)
    try:
        game.load_board(args.size, args.data, args.next)
    except SquaresError as e:
        print(f"Error loading board: {e}")
        sys.exit(1)

    print(game.render())
    status = game.status()
    if status.is_game_over():
        print(f"Game finished: {status.name}")
        if game.winning_square:
            print(f"Winning square coordinates: {format_square(game.winning_square)}")
        return

    choice = game.analyze_next_move()
    if choice is None:
        print("No valid moves available")
    else:
        color = game.get_current_player().color
        print(f"{color} should play ({choice.row}, {choice.col}) [{choice.tier.name}]")

def handle_benchmark(args):
    """Play computer-vs-computer games and report results and timings."""
    from squares.game.rules import SquaresGame
    from squares.utils import Color, Player

    results = {}
    total_moves = 0
    start = time.perf_counter()
    for i in range(args.games):
        seed = None if args.seed is None else args.seed + i
        game = SquaresGame(seed=seed)
        records = game.start_game(args.size, Player.automated(Color.WHITE),
                                  Player.automated(Color.BLACK))
        total_moves += len(records)
        results[game.result.name] = results.get(game.result.name, 0) + 1
    elapsed = time.perf_counter() - start

    print(f"Played {args.games} games on a {args.size}x{args.size} board in {elapsed:.3f}s")
    for name, count in sorted(results.items()):
        print(f"  {name}: {count}")
    if total_moves:
        print(f"Average time per move: {elapsed / total_moves * 1000:.3f} ms")

# --- Main Entry Point ---

def main():
    """Main entry point for the Squares game engine."""
    parser = argparse.ArgumentParser(
        description='Squares game engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play in the console (type HELP for commands)
    python run.py play

    # Serve the REST API
    python run.py serve --port 8080

    # Ask the engine for White's next move on a 3x3 board
    python run.py analyze --size 3 --data "WW.B.B..." --next W

    # Run 50 computer-vs-computer games on a 6x6 board
    python run.py benchmark --size 6 --games 50
    """
    )
    parser.add_argument('--debug',
        action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    parser.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        default='warning',
        help='Set debug level: none (silent), error, warning, info, debug, trace')
    parser.add_argument('--log_file',
        type=str,
        help='Also write log output to this file')
    parser.add_argument('--seed',
        type=int,
        help='Seed for the automated player random fallback')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    subparsers.add_parser('play', help='Play in the console')

    serve_parser = subparsers.add_parser('serve', help='Serve the REST API')
    serve_parser.add_argument('--host', type=str, default='127.0.0.1', help='Bind address')
    serve_parser.add_argument('--port', type=int, default=8080, help='Port to listen on')

    analyze_parser = subparsers.add_parser('analyze', help='Suggest a move for a board')
    analyze_parser.add_argument('--size', type=int, required=True, help='Board size (> 2)')
    analyze_parser.add_argument('--data', type=str, required=True,
        help="Row-major board string of '.', 'W' and 'B'")
    analyze_parser.add_argument('--next', type=str, default='W', help='Color to move: W or B')

    benchmark_parser = subparsers.add_parser('benchmark', help='Computer-vs-computer benchmark')
    benchmark_parser.add_argument('--size', type=int, default=5, help='Board size (> 2)')
    benchmark_parser.add_argument('--games', type=int, default=20, help='Number of games')

    args = parser.parse_args()
    configure_debug(args)

    if args.command == 'play':
        handle_play(args)
    elif args.command == 'serve':
        handle_serve(args)
    elif args.command == 'analyze':
        handle_analyze(args)
    elif args.command == 'benchmark':
        handle_benchmark(args)
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
