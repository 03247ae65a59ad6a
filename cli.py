#!/usr/bin/env python3
"""
signal-lines - Command Line Interface

Generates a signal, optionally adds noise, measures it and exports the
results as flat files, plots and a JSON summary. Demo mode reproduces the
reference scenarios (amplitude detection, noisy-sine frequency analysis,
summation and differentiation).
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, Optional

import config
from signal_lines import export
from signal_lines.analysis import RMS, AmplitudeDetector, FrequencyAnalyzer
from signal_lines.arithmetic import Summator
from signal_lines.calculus import Differentiator, Integrator
from signal_lines.errors import SignalProcessingError
from signal_lines.generators import Generator, NoiseGenerator
from signal_lines.params import (
    DEFAULT_CLAMP_VALUE,
    DifferentiationMethod,
    IntegrationMethod,
    WaveForm,
)

CLI_ERRORS = (SignalProcessingError, OSError, ValueError)


def process_signal(
    output_dir: Path,
    params: Dict,
    verbose: bool = False
) -> bool:
    """
    Generate, measure and export one signal.

    Parameters:
        output_dir: Output directory for results
        params: Parameters dict built from the command line
        verbose: Print verbose progress messages

    Returns:
        True if successful, False otherwise
    """
    name = params['name']

    try:
        if verbose:
            print(f"\nProcessing: {name}")
            print("-" * 60)

        # Step 1: Generate signal
        if verbose:
            print("1. Generating signal...")

        gen = Generator(
            sampling_frequency=params['sampling_frequency'],
            duration=params['duration'],
            oscillation_frequency=params['frequency'],
            init_phase=params['init_phase'],
            offset_y=params['offset_y'],
            amplitude=params['amplitude'],
            waveform=params['waveform'],
            clamp_value=params['clamp_value'],
        )
        gen.execute()
        signal = gen.get_signal_line()

        if verbose:
            print(f"   {signal.points_count} points, {params['waveform']} at {params['frequency']} Hz")

        # Step 2: Add noise
        if params['noise_amplitude'] != 0:
            if verbose:
                print("2. Adding white noise...")
            noise = NoiseGenerator(signal, params['noise_amplitude'], seed=params['seed'])
            noise.execute()
            signal = noise.get_signal_line()

        # Step 3: Measure
        if verbose:
            print("3. Measuring signal...")

        rms = RMS(signal, config.INACCURACY)
        rms.execute()
        amplitude = AmplitudeDetector(signal, config.DC_REMOVAL_INACCURACY)
        amplitude.execute()
        integral = Integrator(signal, params['integration_method'])
        integral.execute()

        derivative = Differentiator(signal, method=params['differentiation_method'])
        derivative.execute()

        lines = {name: signal, f"{name}_derivative": derivative.get_signal_line()}
        summary = {
            'signal': export.describe_signal_line(signal),
            'rms': rms.get_rms_value(),
            'amplitude': amplitude.get_amplitude(),
            'integral': integral.get_integral(),
            'integration_method': str(params['integration_method']),
        }

        # Step 4: Frequency sweep
        if params['sweep'] is not None:
            from_hz, to_hz, step_hz = params['sweep']
            if verbose:
                print(f"4. Sweeping {from_hz}-{to_hz} Hz in {step_hz} Hz steps...")
            analyzer = FrequencyAnalyzer(
                signal, from_hz, to_hz, step_hz,
                use_absolute_value=params['use_absolute_value'],
                inaccuracy=config.INACCURACY
            )
            analyzer.execute()
            spectrum = analyzer.get_signal_line()
            lines[f"{name}_spectrum"] = spectrum
            peak_index = int(abs(spectrum.y).argmax())
            summary['peak_frequency_hz'] = spectrum.get_point(peak_index).x
            summary['peak_correlation'] = spectrum.get_point(peak_index).y

        # Step 5: Export
        if verbose:
            print("5. Exporting results...")

        created_files = []
        for stem, line in lines.items():
            created_files.extend(export.export_signal_lines(
                {stem: line}, output_dir, generate_plots=params['generate_plots']
            ))
        created_files.append(export.save_json(summary, output_dir / f"{name}_summary.json"))

        if verbose:
            print(f"   Created {len(created_files)} output files")

        print_summary(summary, name)
        return True

    except CLI_ERRORS as e:
        print(f"ERROR processing {name}: {e}", file=sys.stderr)
        if verbose:
            import traceback
            traceback.print_exc()
        return False


def print_summary(summary: Dict, name: str) -> None:
    """Print concise measurement summary to console."""
    print(f"\n{'='*60}")
    print(f"Signal Summary: {name}")
    print(f"{'='*60}")
    print(f"Points: {summary['signal']['points_count']}")
    print(f"RMS: {summary['rms']:.6f}")
    print(f"Amplitude: {summary['amplitude']:.6f}")
    print(f"Integral: {summary['integral']:.6f}")
    if 'peak_frequency_hz' in summary:
        print(f"Peak correlation: {summary['peak_correlation']:.6f} "
              f"at {summary['peak_frequency_hz']:.3f} Hz")
    print(f"{'='*60}\n")


def run_demo_mode(output_dir: Path, generate_plots: bool = True, verbose: bool = False) -> bool:
    """
    Run the reference scenarios.

    Parameters:
        output_dir: Output directory for demo results
        generate_plots: Whether to render plots
        verbose: Print verbose messages

    Returns:
        True if successful
    """
    print("Running demo mode...")

    try:
        # Amplitude detection of a clean sine
        print("\nDemo: amplitude detection")
        print("-" * 60)
        gen = Generator(
            sampling_frequency=config.AMPLITUDE_DEMO_SAMPLING_FREQ_HZ,
            duration=config.AMPLITUDE_DEMO_DURATION_SEC,
            oscillation_frequency=config.AMPLITUDE_DEMO_FREQ_HZ,
            amplitude=config.AMPLITUDE_DEMO_AMPLITUDE,
        )
        gen.execute()
        detector = AmplitudeDetector(gen.get_signal_line(), config.DC_REMOVAL_INACCURACY)
        detector.execute()
        print(f"Amplitude of sine wave: {detector.get_amplitude():.6f} "
              f"(generated with {config.AMPLITUDE_DEMO_AMPLITUDE})")

        # Frequency analysis of a noisy sine
        print("\nDemo: frequency analysis of a noisy sine")
        print("-" * 60)
        gen = Generator(
            sampling_frequency=config.SPECTRUM_DEMO_SAMPLING_FREQ_HZ,
            duration=config.SPECTRUM_DEMO_DURATION_SEC,
            oscillation_frequency=config.SPECTRUM_DEMO_FREQ_HZ,
            amplitude=config.SPECTRUM_DEMO_AMPLITUDE,
        )
        gen.execute()
        noise = NoiseGenerator(gen.get_signal_line(), config.SPECTRUM_DEMO_NOISE_AMPLITUDE)
        noise.execute()
        analyzer = FrequencyAnalyzer(
            noise.get_signal_line(),
            config.SPECTRUM_DEMO_FROM_HZ,
            config.SPECTRUM_DEMO_TO_HZ,
            config.SPECTRUM_DEMO_STEP_HZ,
            inaccuracy=config.INACCURACY,
            graph_label="Noise Frequency Spectrum",
        )
        analyzer.execute()
        spectrum = analyzer.get_signal_line()
        peak_index = int(abs(spectrum.y).argmax())
        print(f"Peak correlation at {spectrum.get_point(peak_index).x:.2f} Hz "
              f"(generated at {config.SPECTRUM_DEMO_FREQ_HZ} Hz)")
        created = export.export_signal_lines(
            {'noise_frequency_analysis': spectrum}, output_dir, generate_plots=generate_plots
        )

        # Summation and differentiation
        print("\nDemo: summation and differentiation")
        print("-" * 60)
        gen1 = Generator(
            sampling_frequency=config.SUM_DEMO_SAMPLING_FREQ_HZ,
            duration=config.SUM_DEMO_DURATION_SEC,
            oscillation_frequency=config.SUM_DEMO_FREQ1_HZ,
            amplitude=config.SUM_DEMO_AMPLITUDE1,
            graph_label="Signal 1",
        )
        gen1.execute()
        gen2 = Generator(
            sampling_frequency=config.SUM_DEMO_SAMPLING_FREQ_HZ,
            duration=config.SUM_DEMO_DURATION_SEC,
            oscillation_frequency=config.SUM_DEMO_FREQ2_HZ,
            amplitude=config.SUM_DEMO_AMPLITUDE2,
            graph_label="Signal 2",
        )
        gen2.execute()
        summator = Summator(gen1.get_signal_line(), gen2.get_signal_line(), config.INACCURACY,
                            x_label="Time", y_label="Amplitude")
        summator.execute()
        differentiator = Differentiator(gen1.get_signal_line(), method=DifferentiationMethod.CENTRAL_ONLY)
        differentiator.execute()
        print(f"Sum: {summator.get_signal_line().points_count} points, "
              f"derivative: {differentiator.get_signal_line().points_count} points")
        created += export.export_signal_lines(
            {
                'summation': summator.get_signal_line(),
                'signal1': gen1.get_signal_line(),
                'signal2': gen2.get_signal_line(),
            },
            output_dir,
            generate_plots=generate_plots,
        )
        created += export.export_signal_lines(
            {'derivative': differentiator.get_signal_line()}, output_dir, generate_plots=generate_plots
        )

        if verbose:
            for path in created:
                print(f"   {path}")

    except CLI_ERRORS as e:
        print(f"ERROR: {e}", file=sys.stderr)
        if verbose:
            import traceback
            traceback.print_exc()
        return False

    print(f"\nDemo complete! Results saved to {output_dir}")
    return True


def parse_sweep(from_hz: Optional[float], to_hz: Optional[float], step_hz: Optional[float]):
    """Sweep tuple, or None when no sweep bound was given."""
    if from_hz is None and to_hz is None:
        return None
    if from_hz is None or to_hz is None or step_hz is None:
        raise ValueError("--from-freq, --to-freq and --step-freq must be given together")
    return from_hz, to_hz, step_hz


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='signal-lines - Discrete signal generation and analysis',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate a 60 Hz sine and measure it
  %(prog)s --frequency 60 --amplitude 3 --sampling-frequency 1000 --output results/

  # Noisy sine with a frequency sweep
  %(prog)s --frequency 524 --amplitude 3 --sampling-frequency 10000 --noise 1 \\
      --from-freq 0 --to-freq 1000 --step-freq 1 --output results/

  # Run demo mode
  %(prog)s --demo --output demo_results/
        """
    )

    parser.add_argument('--output', '-o', type=str, required=True,
                        help='Output directory for results')
    parser.add_argument('--demo', action='store_true',
                        help='Run the reference demo scenarios')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print verbose progress messages')
    parser.add_argument('--no-plots', action='store_true',
                        help='Skip plot generation')

    # Signal parameters
    parser.add_argument('--name', type=str, default='signal',
                        help='Stem of the output files (default: signal)')
    parser.add_argument('--waveform', type=str, default=WaveForm.SINE.value,
                        choices=[w.value for w in WaveForm],
                        help='Waveform (default: sine)')
    parser.add_argument('--frequency', type=float, default=1.0,
                        help='Oscillation frequency in Hz (default: 1)')
    parser.add_argument('--amplitude', type=float, default=1.0,
                        help='Amplitude (default: 1)')
    parser.add_argument('--sampling-frequency', type=float, default=100.0,
                        help='Sampling frequency in Hz (default: 100)')
    parser.add_argument('--duration', type=float, default=1.0,
                        help='Duration in seconds (default: 1)')
    parser.add_argument('--init-phase', type=float, default=0.0,
                        help='Initial phase in radians (default: 0)')
    parser.add_argument('--offset-y', type=float, default=0.0,
                        help='Vertical offset (default: 0)')
    parser.add_argument('--clamp', type=float, default=DEFAULT_CLAMP_VALUE,
                        help=f'Clamp for tangent/cotangent (default: {DEFAULT_CLAMP_VALUE})')
    parser.add_argument('--noise', type=float, default=0.0,
                        help='White noise amplitude (default: 0 = no noise)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Noise seed for reproducible output')

    # Processing parameters
    parser.add_argument('--integration', type=str, default=IntegrationMethod.TRAPEZOIDAL.value,
                        choices=[m.value for m in IntegrationMethod],
                        help='Integration method (default: trapezoidal)')
    parser.add_argument('--differentiation', type=str,
                        default=DifferentiationMethod.CENTRAL_AND_EDGES.value,
                        choices=[m.value for m in DifferentiationMethod],
                        help='Differentiation method (default: central_and_edges)')
    parser.add_argument('--from-freq', type=float, help='Sweep start in Hz')
    parser.add_argument('--to-freq', type=float, help='Sweep end in Hz (exclusive)')
    parser.add_argument('--step-freq', type=float, default=1.0, help='Sweep step in Hz (default: 1)')
    parser.add_argument('--abs', action='store_true',
                        help='Store absolute correlation values in the sweep')

    args = parser.parse_args()
    output_dir = Path(args.output)

    if args.demo:
        success = run_demo_mode(output_dir, not args.no_plots, args.verbose)
        sys.exit(0 if success else 1)

    try:
        sweep = parse_sweep(args.from_freq, args.to_freq, args.step_freq)
    except ValueError as e:
        parser.error(str(e))

    params = {
        'name': args.name,
        'waveform': args.waveform,
        'frequency': args.frequency,
        'amplitude': args.amplitude,
        'sampling_frequency': args.sampling_frequency,
        'duration': args.duration,
        'init_phase': args.init_phase,
        'offset_y': args.offset_y,
        'clamp_value': args.clamp,
        'noise_amplitude': args.noise,
        'seed': args.seed,
        'integration_method': args.integration,
        'differentiation_method': args.differentiation,
        'sweep': sweep,
        'use_absolute_value': args.abs,
        'generate_plots': not args.no_plots,
    }

    success = process_signal(output_dir, params, args.verbose)
    sys.exit(0 if success else 1)


if __name__ == '__main__':
    main()
