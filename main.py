import os
import sys

sys.path.append(os.getcwd())
import config
from helpers.log import setup_logging
from helpers.plot import plot_filter_comparison, plot_magnitude_response
from helpers.simulation_runner import (
    design_demo_filters,
    run_filter_demo,
    run_frequency_sweep,
)
from siras.exceptions import SirasError
from siras.filter_design import PROTOTYPES, FilterType, design


class SirasApp:
    """
    Main Application Controller for the SIRAS filter demos.

    Handles the CLI menu and orchestrates:
    1. The Butterworth and Bessel zero-phase filtering demos.
    2. Frequency-response inspection of the demo filters.
    3. Designing a custom filter and printing its coefficients.
    """

    def __init__(self):
        self.demo_params = dict(config.DEMO_PARAMS)
        self.save_plots = True
        self.running = True

    def clear_screen(self):
        os.system("cls" if os.name == "nt" else "clear")

    def print_header(self):
        p = self.demo_params
        print("\n" + "=" * 60)
        print("   SIRAS | LTI Systems & Digital Filter Design   ")
        print("=" * 60)
        print(
            f"fs={p['sample_rate']} Hz, order={p['order']}, "
            f"tones={p['tone_freqs']} Hz, padlen={p['padlen']}"
        )
        print(f"Plots: {'saved to ' + config.PLOT_PARAMS['output_dir'] if self.save_plots else 'shown'}")
        print("-" * 60)

    def _plot_path(self, name):
        if not self.save_plots:
            return None
        return os.path.join(config.PLOT_PARAMS["output_dir"], name)

    def main_menu(self):
        self.clear_screen()
        while self.running:
            self.print_header()
            print("[1] Run Butterworth Demo (Zero-Phase Low/High-Pass)")
            print("[2] Run Bessel Demo (Zero-Phase Low/High-Pass)")
            print("[3] Show Demo Filter Frequency Responses")
            print("[4] Design Custom Filter")
            print("[5] Toggle Save/Show Plots")
            print("[q] Exit")

            choice = input("\nSelect Option: ").strip()

            if choice == "1":
                self.run_demo("butterworth")
            elif choice == "2":
                self.run_demo("bessel")
            elif choice == "3":
                self.run_frequency_responses()
            elif choice == "4":
                self.design_custom_filter()
            elif choice == "5":
                self.save_plots = not self.save_plots
            elif choice == "q":
                self.running = False
            else:
                input("Invalid option. Press Enter...")

    def run_demo(self, family):
        print(f"\nFiltering test signal with {family.capitalize()} filters...")
        try:
            result = run_filter_demo(family, self.demo_params)
        except SirasError as e:
            print(f"Design failed: {e}")
            return

        for name, flt in result["filters"].items():
            print(f"  {name}: order {flt.order}, den={flt.den.round(6).tolist()}")

        plot_filter_comparison(result, save_path=self._plot_path(f"{family}_filtfilt.png"))

    def run_frequency_responses(self):
        nyquist = self.demo_params["sample_rate"] / 2.0
        for family in PROTOTYPES:
            try:
                filters = design_demo_filters(family, self.demo_params)
            except SirasError as e:
                print(f"Design failed for {family}: {e}")
                continue
            freqs, mags = run_frequency_sweep(filters, 1.0, 0.99 * nyquist)
            plot_magnitude_response(
                freqs,
                mags,
                f"{family.capitalize()} magnitude response",
                save_path=self._plot_path(f"{family}_magnitude.png"),
            )

    def design_custom_filter(self):
        print(f"\nPrototypes: {', '.join(PROTOTYPES)}")
        try:
            prototype = input("Prototype: ").strip().lower()
            filter_type = input("Type (lowpass/highpass): ").strip().lower()
            order = int(input("Order: "))
            cutoff = float(input("Cutoff (Hz): "))
            sample_rate = float(input("Sample rate (Hz): "))
            alpha = float(input(f"Alpha [{config.FILTER_DESIGN_PARAMS['alpha']}]: ") or config.FILTER_DESIGN_PARAMS["alpha"])
        except ValueError:
            print("Invalid number.")
            return

        try:
            flt = design(
                order,
                cutoff,
                1.0 / sample_rate,
                alpha=alpha,
                filter_type=FilterType(filter_type) if filter_type else FilterType.LOWPASS,
                prototype=prototype or None,
            )
        except (SirasError, ValueError, ZeroDivisionError) as e:
            print(f"Design failed: {e}")
            return

        print("-" * 60)
        print(f"num = {flt.num.tolist()}")
        print(f"den = {flt.den.tolist()}")
        gain = abs(flt.frequency_response([cutoff])[0])
        print(f"|H| at cutoff = {gain:.4f}")
        print("-" * 60)
        input("Press Enter to return to menu...")


if __name__ == "__main__":
    setup_logging()
    app = SirasApp()
    try:
        app.main_menu()
    except (KeyboardInterrupt, EOFError):
        print("\n\nExiting...")
    finally:
        sys.stdout.flush()
        sys.exit(0)
