"""
Tests for the core.integrator module.

This module tests aging, end-of-life transitions, supernova eligibility,
the collapse transition, binary transfer ordering and age scrubbing.
"""

import unittest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stellarlife.core.config import EngineConfig
from stellarlife.core.context import SimulationContext
from stellarlife.core.integrator import TimeIntegrator
from stellarlife.core.ledger import Ledger
from stellarlife.core.types import EventType, Fate


def make_integrator(primary_mass=1.0, secondary_mass=0.8, **cfg_kwargs):
    cfg = EngineConfig(**cfg_kwargs)
    ctx = SimulationContext(cfg, primary_mass, secondary_mass)
    ledger = Ledger(cfg)
    return ctx, ledger, TimeIntegrator(ctx, ledger)


class TestAging(unittest.TestCase):
    """Tests for plain aging."""

    def test_age_accumulates(self):
        """Test ages add up over several steps."""
        ctx, _, integrator = make_integrator()
        for _ in range(4):
            self.assertEqual(integrator.step(1e8), [])
        self.assertAlmostEqual(ctx.primary.age, 4e8)
        self.assertEqual(ctx.step, 4)

    def test_secondary_frozen_outside_binary(self):
        """Test the secondary does not age while binary mode is off."""
        ctx, _, integrator = make_integrator()
        integrator.step(1e9)
        self.assertEqual(ctx.secondary.age, 0.0)
        ctx.binary_enabled = True
        integrator.step(1e9)
        self.assertEqual(ctx.secondary.age, 1e9)

    def test_negative_step_ignored(self):
        """Test a negative delta never rewinds age."""
        ctx, _, integrator = make_integrator()
        integrator.step(1e8)
        integrator.step(-5e7)
        self.assertEqual(ctx.primary.age, 1e8)


class TestEndOfLife(unittest.TestCase):
    """Tests for the end-of-life transition."""

    def test_end_clamps_age(self):
        """Test overshooting the lifetime clamps age to t_total exactly."""
        ctx, _, integrator = make_integrator()
        star = ctx.primary
        integrator.step(star.t_total / 2)
        events = integrator.step(star.t_total)
        self.assertTrue(star.ended)
        self.assertEqual(star.age, star.t_total)
        self.assertTrue(star.just_ended)
        self.assertTrue(star.collapse_animating)
        self.assertEqual(star.collapse_progress, 0.0)
        self.assertEqual(len(events), 1)
        self.assertIs(events[0].type, EventType.END_OF_LIFE)
        self.assertIs(events[0].fate, Fate.WHITE_DWARF)
        self.assertFalse(events[0].supernova)

    def test_just_ended_is_one_shot(self):
        """Test a later step leaves age alone and clears just_ended."""
        ctx, _, integrator = make_integrator()
        star = ctx.primary
        integrator.step(star.t_total * 3)
        integrator.step(1e9)
        self.assertEqual(star.age, star.t_total)
        self.assertFalse(star.just_ended)
        self.assertTrue(star.ended)

    def test_exact_landing_ends(self):
        """Test landing exactly on t_total ends the star."""
        ctx, _, integrator = make_integrator()
        events = integrator.step(ctx.primary.t_total)
        self.assertTrue(ctx.primary.ended)
        self.assertEqual(len(events), 1)

    def test_massive_star_supernova_once(self):
        """Test a 20 Msun star starts exactly one supernova."""
        ctx, ledger, integrator = make_integrator(primary_mass=20.0)
        star = ctx.primary
        events = integrator.step(star.t_total * 2)
        self.assertTrue(events[0].supernova)
        self.assertTrue(star.had_supernova)
        for _ in range(5):
            later = integrator.step(star.t_total)
            self.assertFalse(any(e.type is EventType.END_OF_LIFE for e in later))
        supernovae = [e for e in ledger.history if e.supernova]
        self.assertEqual(len(supernovae), 1)
        self.assertEqual(ledger.supernova_count, 1)

    def test_low_mass_star_never_supernova(self):
        """Test a 1 Msun star is never supernova eligible."""
        ctx, ledger, integrator = make_integrator(primary_mass=1.0)
        events = integrator.step(ctx.primary.t_total * 2)
        self.assertFalse(events[0].supernova)
        self.assertFalse(ctx.primary.had_supernova)
        self.assertEqual(ledger.supernova_count, 0)


class TestCollapse(unittest.TestCase):
    """Tests for the wall-clock collapse transition."""

    def test_collapse_progress(self):
        """Test collapse advances with dt_ms and completes once."""
        ctx, _, integrator = make_integrator(collapse_duration_ms=1000.0)
        star = ctx.primary
        integrator.step(star.t_total * 2, dt_ms=600.0)
        # the ending step itself does not advance the collapse
        self.assertEqual(star.collapse_progress, 0.0)
        integrator.step(0.0, dt_ms=600.0)
        self.assertAlmostEqual(star.collapse_progress, 0.6)
        self.assertTrue(star.collapse_animating)
        events = integrator.step(0.0, dt_ms=600.0)
        self.assertEqual(star.collapse_progress, 1.0)
        self.assertFalse(star.collapse_animating)
        self.assertEqual([e.type for e in events], [EventType.COLLAPSE_COMPLETE])
        self.assertEqual(integrator.step(0.0, dt_ms=600.0), [])


class TestBinaryStep(unittest.TestCase):
    """Tests for transfer inside the integration step."""

    def test_transfer_each_step(self):
        """Test the donor loses and the accretor gains the same mass per step."""
        ctx, _, integrator = make_integrator(primary_mass=1.2, secondary_mass=0.8)
        ctx.binary_enabled = True
        ctx.binary.set_separation(0.012)
        ctx.binary.set_transfer_rate(0.02 / 1e6)
        for n in range(1, 4):
            m1, m2 = ctx.primary.mass_current, ctx.secondary.mass_current
            totals = (ctx.primary.t_total, ctx.secondary.t_total)
            events = integrator.step(1e6)
            transfers = [e for e in events if e.type is EventType.MASS_TRANSFER]
            self.assertEqual(len(transfers), 1)
            self.assertLess(ctx.primary.mass_current, m1)
            self.assertGreater(ctx.secondary.mass_current, m2)
            self.assertAlmostEqual(m1 - ctx.primary.mass_current, ctx.secondary.mass_current - m2)
            self.assertGreaterEqual(ctx.primary.mass_current, 0.1)
            self.assertNotEqual(ctx.primary.t_total, totals[0])
            self.assertNotEqual(ctx.secondary.t_total, totals[1])
            self.assertAlmostEqual(ctx.primary.age, n * 1e6)
            self.assertAlmostEqual(ctx.secondary.age, n * 1e6)

    def test_no_transfer_when_disabled(self):
        """Test disabling binary mode suppresses transfer."""
        ctx, _, integrator = make_integrator(primary_mass=1.2, secondary_mass=0.8)
        ctx.binary.set_separation(0.012)
        integrator.step(1e6)
        self.assertEqual(ctx.primary.mass_current, 1.2)
        self.assertEqual(ctx.secondary.mass_current, 0.8)


class TestSetAge(unittest.TestCase):
    """Tests for direct age assignment."""

    def test_clamped_assignment(self):
        """Test ages are clamped into [0, t_total]."""
        ctx, _, integrator = make_integrator()
        integrator.set_age(5e9)
        self.assertEqual(ctx.primary.age, 5e9)
        integrator.set_age(-1.0)
        self.assertEqual(ctx.primary.age, 0.0)
        integrator.set_age(1e20)
        self.assertEqual(ctx.primary.age, ctx.primary.t_total)
        self.assertFalse(ctx.primary.ended)

    def test_end_fires_on_next_step(self):
        """Test scrubbing to the end does not end the star until a step."""
        ctx, _, integrator = make_integrator()
        integrator.set_age(1e20)
        events = integrator.step(0.0)
        self.assertTrue(ctx.primary.ended)
        self.assertIs(events[0].type, EventType.END_OF_LIFE)

    def test_binary_mode_sets_both(self):
        """Test both stars are scrubbed in binary mode, each to its own range."""
        ctx, _, integrator = make_integrator()
        ctx.binary_enabled = True
        integrator.set_age(1.5e10)
        self.assertEqual(ctx.primary.age, ctx.primary.t_total)
        self.assertEqual(ctx.secondary.age, 1.5e10)

    def test_no_transfer_replayed(self):
        """Test scrubbing never moves mass."""
        ctx, _, integrator = make_integrator(primary_mass=1.2, secondary_mass=0.8)
        ctx.binary_enabled = True
        ctx.binary.set_separation(0.012)
        integrator.set_age(3e9)
        self.assertEqual(ctx.primary.mass_current, 1.2)
        self.assertEqual(ctx.secondary.mass_current, 0.8)

    def test_scrub_back_keeps_ended_star_terminal(self):
        """Test an ended star stays ended with its age frozen at t_total."""
        ctx, ledger, integrator = make_integrator(primary_mass=25.0)
        star = ctx.primary
        integrator.step(star.t_total * 2)
        integrator.step(0.0, ctx.cfg.collapse_duration_ms)
        integrator.set_age(star.t_total / 2)
        self.assertTrue(star.ended)
        self.assertEqual(star.age, star.t_total)
        self.assertTrue(star.had_supernova)
        events = integrator.step(star.t_total)
        self.assertEqual([e.type for e in events], [])
        self.assertEqual(ledger.supernova_count, 1)

    def test_scrub_back_single_star(self):
        """Test a one solar mass star scrubbed back after its end stays ended."""
        ctx, _, integrator = make_integrator(primary_mass=1.0)
        integrator.step(2e10)
        integrator.set_age(1e9)
        self.assertTrue(ctx.primary.ended)
        self.assertEqual(ctx.primary.age, ctx.primary.t_total)

    def test_scrub_skips_ended_star_only(self):
        """Test a living secondary is still scrubbed when the primary has ended."""
        ctx, _, integrator = make_integrator(primary_mass=10.0, secondary_mass=0.8)
        ctx.binary_enabled = True
        integrator.step(ctx.primary.t_total)
        integrator.set_age(1e6)
        self.assertEqual(ctx.primary.age, ctx.primary.t_total)
        self.assertEqual(ctx.secondary.age, 1e6)


class TestLedgerHistory(unittest.TestCase):
    """Tests for the bounded event history."""

    def test_history_trimmed(self):
        """Test the history never exceeds its configured cap."""
        ctx, ledger, integrator = make_integrator(
            primary_mass=1.2, secondary_mass=0.8, event_history_max=3
        )
        ctx.binary_enabled = True
        ctx.binary.set_separation(0.012)
        ctx.binary.set_transfer_rate(0.01 / 1e6)
        for _ in range(6):
            integrator.step(1e5)
        self.assertEqual(len(ledger.history), 3)
        self.assertEqual(ledger.history[-1].step, 6)


if __name__ == "__main__":
    unittest.main()
