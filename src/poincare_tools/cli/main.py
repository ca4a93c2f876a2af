"""CLI entry point: poincare-tools map|bbox subcommands."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, cast

from poincare_tools.config import get_log_level
from poincare_tools.constants import (
    DEFAULT_ARROW_HEADANGLE,
    DEFAULT_ARROW_THICKNESS,
    DEFAULT_EPSJOBNAME,
    DEFAULT_HIDDEN_GRAYTONE,
    DEFAULT_MAX_WHITENESS,
    DEFAULT_MIN_WHITENESS,
    DEFAULT_OUTFILENAME,
    DEFAULT_PATH_THICKNESS,
    DEFAULT_PHI_STEPS,
    DEFAULT_RHO_STEPS,
    DEFAULT_ROT_PHI_DEG,
    DEFAULT_ROT_PSI_DEG,
    DEFAULT_SCALEFACTOR,
    DEG2RAD,
    VERSION_NUMBER,
)
from poincare_tools.input_params import write_input_parameters
from poincare_tools.params import (
    OVERLAY_AXIS_POSITIONS,
    AxisSpec,
    MapParams,
    OverlayFrame,
    RenderStyle,
    ViewState,
    default_axes,
    parse_arrow_spec,
    parse_axis_labels,
    parse_axis_lengths,
    parse_positive_int,
    parse_whiteness,
    with_axis_lengths,
)
from poincare_tools.poincare_map import generate_poincare_map
from poincare_tools.rendering.eps import generate_eps, scan_bounding_box

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or POINCARE_TOOLS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = get_log_level()
    if env_level is not None:
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )
    # Keep matplotlib's font manager quiet under --verbose.
    logging.getLogger('matplotlib').setLevel(logging.WARNING)


def _params_from_args(args: argparse.Namespace) -> MapParams:
    """Build MapParams from parsed map-subcommand arguments.

    Raises:
        ValueError: On inconsistent option values.
    """
    lower, upper = args.shading if args.shading else (DEFAULT_MIN_WHITENESS, DEFAULT_MAX_WHITENESS)
    view = ViewState(
        psi=args.psi * DEG2RAD,
        phi=args.phi * DEG2RAD,
        normalize=args.normalize,
        lower_whiteness=lower,
        upper_whiteness=upper,
    )
    style = RenderStyle(
        path_thickness=args.paththickness,
        arrow_thickness=args.arrowthickness,
        arrow_head_angle=args.arrowheadangle,
        draw_hidden_dashed=args.draw_hidden_dashed,
        hidden_graytone=args.hiddengraytone,
        use_bezier=args.bezier,
        draw_paths_as_arrows=args.draw_paths_as_arrows,
        reverse_arrow_paths=args.reverse_arrow_paths,
        tick_size=4 * args.paththickness,
    )
    axes = parse_axis_labels(args.axislabels) if args.axislabels else default_axes(args.normalize)
    if args.axislengths:
        axes = with_axis_lengths(axes, parse_axis_lengths(args.axislengths))

    overlay = None
    if args.xtracoordsys:
        overlay_labels = (
            args.xtracoordsys_axislabel_x,
            args.xtracoordsys_axislabel_y,
            args.xtracoordsys_axislabel_z,
        )
        overlay_axes = tuple(
            AxisSpec(label=label, position=pos)
            for label, pos in zip(overlay_labels, OVERLAY_AXIS_POSITIONS)
        )
        if args.xtracoordsys_axislengths:
            overlay_axes = with_axis_lengths(
                overlay_axes,  # type: ignore[arg-type]
                parse_axis_lengths(args.xtracoordsys_axislengths),
            )
        overlay = OverlayFrame(
            delta_psi=args.xtracoordsys[0] * DEG2RAD,
            delta_phi=args.xtracoordsys[1] * DEG2RAD,
            axes=overlay_axes,  # type: ignore[arg-type]
        )

    arrows = tuple(parse_arrow_spec(a) for a in (args.arrow or []))
    return MapParams(
        view=view,
        style=style,
        scalefactor=args.scalefactor,
        rho_steps=args.rhodivisor,
        phi_steps=args.phidivisor,
        axes=axes,
        draw_axes_inside=args.draw_axes_inside,
        overlay=overlay,
        arrows=arrows,
        input_file=args.inputfile,
        output_file=args.outputfile,
        aux_source=args.auxsource,
        eps_job_name=args.epsoutput,
        command_line=tuple(sys.argv[1:]),
    )


def _map_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Generate a Poincare map (map subcommand).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        params = _params_from_args(args)
        if args.verbose:
            write_input_parameters(sys.stdout, params)
        model = generate_poincare_map(params)
        if args.preview:
            from poincare_tools.rendering.matplotlib_view import draw_poincare_map_mpl

            draw_poincare_map_mpl(model, args.preview)
    except (ValueError, RuntimeError, ArithmeticError, ImportError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    if params.eps_job_name:
        box = generate_eps(params.output_file, params.eps_job_name)
        if box is not None:
            print(f'{params.eps_job_name}.eps: {box.describe()}')
    return 0


def _bbox_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the bounding box of an EPS file (bbox subcommand)."""
    try:
        box = scan_bounding_box(args.file)
    except (ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    print(f'{args.file}: {box.describe()}')
    return 0


def main() -> int:
    """Entry point for poincare-tools CLI (map | bbox).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='poincare-tools',
        description='Stokes parameter trajectories on the Poincare sphere, as MetaPost source.',
    )
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {VERSION_NUMBER}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    map_parser = subparsers.add_parser('map', help='Generate MetaPost map of Stokes trajectories')
    map_parser.add_argument('-f', '--inputfile', type=str, default=None, help='Trajectory file')
    map_parser.add_argument(
        '-o', '--outputfile', type=str, default=DEFAULT_OUTFILENAME, help='MetaPost output file'
    )
    map_parser.add_argument(
        '-e',
        '--epsoutput',
        type=str,
        nargs='?',
        const=DEFAULT_EPSJOBNAME,
        default=None,
        metavar='JOB',
        help=f'Also run mpost/tex/dvips to produce JOB.eps (JOB defaults to {DEFAULT_EPSJOBNAME})',
    )
    map_parser.add_argument(
        '--auxsource', type=str, default=None, help='MetaPost file to input before endfig'
    )
    map_parser.add_argument(
        '-n', '--normalize', action='store_true', help='Normalize Stokes vectors to the unit sphere'
    )
    map_parser.add_argument(
        '-b', '--bezier', action='store_true', help='Draw trajectories as smooth curves'
    )
    map_parser.add_argument(
        '--paththickness', type=float, default=DEFAULT_PATH_THICKNESS, help='Path pen (pt)'
    )
    map_parser.add_argument(
        '--arrowthickness', type=float, default=DEFAULT_ARROW_THICKNESS, help='Arrow pen (pt)'
    )
    map_parser.add_argument(
        '--arrowheadangle',
        type=float,
        default=DEFAULT_ARROW_HEADANGLE,
        help='Arrowhead angle of trajectory arrows (deg)',
    )
    map_parser.add_argument(
        '--draw_hidden_dashed', action='store_true', help='Draw hidden parts dashed'
    )
    map_parser.add_argument(
        '--draw_paths_as_arrows', action='store_true', help='End each trajectory with an arrowhead'
    )
    map_parser.add_argument(
        '--reverse_arrow_paths', action='store_true', help='Put the arrowhead at the start instead'
    )
    map_parser.add_argument(
        '--psi',
        '--rotatepsi',
        dest='psi',
        type=float,
        default=DEFAULT_ROT_PSI_DEG,
        help='First rotation, about z (deg)',
    )
    map_parser.add_argument(
        '--phi',
        '--rotatephi',
        dest='phi',
        type=float,
        default=DEFAULT_ROT_PHI_DEG,
        help='Second rotation, about y (deg)',
    )
    map_parser.add_argument(
        '--rhodivisor', type=parse_positive_int, default=DEFAULT_RHO_STEPS, help='Shading rings'
    )
    map_parser.add_argument(
        '--phidivisor', type=parse_positive_int, default=DEFAULT_PHI_STEPS, help='Shading sectors'
    )
    map_parser.add_argument(
        '--scalefactor', type=float, default=DEFAULT_SCALEFACTOR, help='Sphere radius (mm)'
    )
    map_parser.add_argument(
        '--hiddengraytone',
        type=parse_whiteness,
        default=DEFAULT_HIDDEN_GRAYTONE,
        help='Whiteness of hidden parts (0 black, 1 white)',
    )
    map_parser.add_argument(
        '--shading',
        type=parse_whiteness,
        nargs=2,
        default=None,
        metavar=('LOWER', 'UPPER'),
        help='Whiteness bounds of the sphere shading',
    )
    map_parser.add_argument(
        '--axislengths',
        type=float,
        nargs=6,
        default=None,
        metavar=('NEG1', 'POS1', 'NEG2', 'POS2', 'NEG3', 'POS3'),
        help='Axis lengths behind and in front of the origin (sphere radii)',
    )
    map_parser.add_argument(
        '--axislabels',
        type=str,
        nargs=6,
        default=None,
        metavar=('L1', 'POS1', 'L2', 'POS2', 'L3', 'POS3'),
        help='Axis labels (TeX math) and positions',
    )
    map_parser.add_argument(
        '--draw_axes_inside', action='store_true', help='Draw axes inside the sphere (dashed)'
    )
    map_parser.add_argument(
        '--xtracoordsys',
        type=float,
        nargs=2,
        default=None,
        metavar=('DPSI', 'DPHI'),
        help='Additional coordinate system rotated by DPSI, DPHI (deg)',
    )
    map_parser.add_argument('--xtracoordsys_axislabel_x', type=str, default=None)
    map_parser.add_argument('--xtracoordsys_axislabel_y', type=str, default=None)
    map_parser.add_argument('--xtracoordsys_axislabel_z', type=str, default=None)
    map_parser.add_argument(
        '--xtracoordsys_axislengths',
        type=float,
        nargs=6,
        default=None,
        metavar=('NEGX', 'POSX', 'NEGY', 'POSY', 'NEGZ', 'POSZ'),
    )
    map_parser.add_argument(
        '--arrow',
        type=str,
        nargs=8,
        action='append',
        default=None,
        metavar=('S1A', 'S2A', 'S3A', 'S1B', 'S2B', 'S3B', 'TYPE', 'BLACKNESS'),
        help='Geodesic arrow; TYPE 0 solid, 1 dashed (repeatable)',
    )
    map_parser.add_argument(
        '--preview', type=str, default=None, metavar='FILE', help='Also render with matplotlib'
    )
    map_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    map_parser.set_defaults(func=_map_cmd)

    bbox_parser = subparsers.add_parser('bbox', help='Print the bounding box of an EPS file')
    bbox_parser.add_argument('file', type=str, help='EPS file')
    bbox_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    bbox_parser.set_defaults(func=_bbox_cmd)

    args = parser.parse_args()
    _configure_logging(verbose=args.verbose)
    return cast(int, args.func(parser, args))


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
