"""
Tests for the training algorithms.

The iterative optimizers run until the residual norm stops changing by
more than machine epsilon, so the exactly determined fixtures below take
tens of thousands of gradient steps. Expensive fits are module-scoped.
"""

import numpy as np
import pytest

from pylinreg.core.compute.tolerances import CLOSED_FORM, ITERATIVE, select_tolerance
from pylinreg.core.exceptions import DimensionError, ValidationError
from pylinreg.regression import (
    Adam,
    AdamParams,
    LinearModel,
    NaiveGradient,
    Optimizer,
    PseudoInverse,
    RegressionDesign,
    fit,
)

X_EXACT = [[1.0, 0.0], [1.0, 4.0]]


@pytest.fixture(scope="module")
def naive_fit():
    return fit(X_EXACT, [0.0, 4.0], optimizer=NaiveGradient(0.001))


@pytest.fixture(scope="module")
def adam_fit():
    # Bounded so a regression in the stop rule fails instead of hanging
    return fit(X_EXACT, [0.0, 4.0], optimizer=Adam(max_iter=200_000))


# ═══════════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════════


class TestConfiguration:

    def test_adam_defaults(self):
        params = AdamParams()
        assert params.learning_rate == 0.9
        assert params.decay_first_moment == 0.9
        assert params.decay_second_moment == 0.999
        assert Adam().params == params

    def test_optimizers_are_immutable(self):
        opt = NaiveGradient(0.01)
        with pytest.raises(AttributeError):
            opt.learning_rate = 0.1

    @pytest.mark.parametrize("lr", [0.0, -1.0, float("nan")])
    def test_naive_rejects_bad_learning_rate(self, lr):
        with pytest.raises(ValidationError, match="learning_rate"):
            NaiveGradient(lr)

    @pytest.mark.parametrize("field", ["decay_first_moment", "decay_second_moment"])
    @pytest.mark.parametrize("value", [0.0, 1.0])
    def test_adam_rejects_degenerate_decay(self, field, value):
        with pytest.raises(ValidationError, match=field):
            AdamParams(**{field: value})

    def test_rejects_bad_max_iter(self):
        with pytest.raises(ValidationError, match="max_iter"):
            Adam(max_iter=0)

    def test_names(self):
        assert NaiveGradient(0.1).name == 'naive_gradient'
        assert Adam().name == 'adam'
        assert PseudoInverse().name == 'pseudo_inverse'

    def test_satisfy_protocol(self):
        for opt in (NaiveGradient(0.1), Adam(), PseudoInverse()):
            assert isinstance(opt, Optimizer)

    def test_tolerance_tiers(self):
        assert select_tolerance('pseudo_inverse') is CLOSED_FORM
        assert select_tolerance('adam') is ITERATIVE


# ═══════════════════════════════════════════════════════════════════════
# NaiveGradient
# ═══════════════════════════════════════════════════════════════════════


class TestNaiveGradient:

    def test_converges_to_least_squares(self, naive_fit):
        error = np.linalg.norm(naive_fit.coefficients - [0.0, 1.0])
        assert error < ITERATIVE.atol
        assert naive_fit.converged

    def test_reports_iterations_and_residual(self, naive_fit):
        assert naive_fit.iterations > 1
        assert naive_fit.residual_norm < 1e-10
        assert naive_fit.info['convergence_criterion'] == 'residual_norm_delta'
        assert naive_fit.info['final_residual_change'] <= np.finfo(np.float64).eps

    def test_fits_bias(self):
        result = fit(X_EXACT, [2.0, 0.0], optimizer=NaiveGradient(0.001))
        error = np.linalg.norm(result.coefficients - [2.0, -0.5])
        assert error < ITERATIVE.atol

    def test_well_conditioned_problem_is_fast(self):
        result = fit([[1.0, 0.0], [0.0, 1.0]], [3.0, -1.0], optimizer=NaiveGradient(1.0))
        np.testing.assert_allclose(result.coefficients, [3.0, -1.0], atol=1e-12)
        assert result.iterations < 200

    def test_max_iter_stops_and_warns(self):
        with pytest.warns(RuntimeWarning, match="max_iter=5"):
            result = fit(X_EXACT, [0.0, 4.0], optimizer=NaiveGradient(0.001, max_iter=5))
        assert result.iterations == 5
        assert not result.converged
        assert any("max_iter" in w for w in result.warnings)

    def test_first_step_follows_gradient(self):
        """One step from zero: theta = -lr * [-2, -8]."""
        with pytest.warns(RuntimeWarning):
            result = fit(X_EXACT, [0.0, 4.0], optimizer=NaiveGradient(0.5, max_iter=1))
        np.testing.assert_array_equal(result.coefficients, [1.0, 4.0])
        # Residual is measured on the predictions made before the update
        assert result.residual_norm == 4.0


# ═══════════════════════════════════════════════════════════════════════
# Adam
# ═══════════════════════════════════════════════════════════════════════


class TestAdam:

    def test_converges_with_default_params(self, adam_fit):
        error = np.linalg.norm(adam_fit.coefficients - [0.0, 1.0])
        assert error < ITERATIVE.atol

    def test_info_records_hyperparameters(self, adam_fit):
        assert adam_fit.info['decay_first_moment'] == 0.9
        assert adam_fit.info['decay_second_moment'] == 0.999
        assert adam_fit.optimizer_name == 'adam'

    def test_first_step_is_learning_rate_sized(self):
        """Bias correction makes the first update lr * sign(g)."""
        opt = Adam(AdamParams(learning_rate=0.1), max_iter=1)
        with pytest.warns(RuntimeWarning):
            result = fit(X_EXACT, [0.0, 4.0], optimizer=opt)
        np.testing.assert_allclose(result.coefficients, [0.1, 0.1], rtol=1e-12)

    def test_state_does_not_persist_between_runs(self):
        opt = Adam(AdamParams(learning_rate=0.05), max_iter=50)
        with pytest.warns(RuntimeWarning):
            first = fit(X_EXACT, [0.0, 4.0], optimizer=opt)
        with pytest.warns(RuntimeWarning):
            second = fit(X_EXACT, [0.0, 4.0], optimizer=opt)
        np.testing.assert_array_equal(first.coefficients, second.coefficients)


# ═══════════════════════════════════════════════════════════════════════
# PseudoInverse
# ═══════════════════════════════════════════════════════════════════════


class TestPseudoInverse:

    def test_exact_system(self, exact_system):
        X, y, theta_star = exact_system
        result = fit(X, y, optimizer=PseudoInverse())
        np.testing.assert_allclose(
            result.coefficients, theta_star, rtol=CLOSED_FORM.rtol, atol=CLOSED_FORM.atol
        )
        assert result.iterations == 1
        assert result.residual_norm < 1e-12

    def test_matches_lstsq(self, noisy_regression_data):
        X, y, _ = noisy_regression_data
        result = fit(X, y, optimizer=PseudoInverse())
        expected, *_ = np.linalg.lstsq(X, y, rcond=None)
        np.testing.assert_allclose(result.coefficients, expected, rtol=1e-10, atol=1e-12)

    def test_residual_norm_matches_fit(self, noisy_regression_data):
        X, y, _ = noisy_regression_data
        result = fit(X, y, optimizer=PseudoInverse())
        expected = np.linalg.norm(y - X @ result.coefficients)
        assert abs(result.residual_norm - expected) < 1e-10

    def test_timing_sections(self, exact_system):
        X, y, _ = exact_system
        result = fit(X, y, optimizer=PseudoInverse())
        assert {'total_seconds', 'pseudo_inverse', 'solve', 'residuals'} <= set(result.timing)


# ═══════════════════════════════════════════════════════════════════════
# Cross-optimizer agreement and the bare optimize() entry point
# ═══════════════════════════════════════════════════════════════════════


class TestAgreement:

    def test_all_optimizers_agree(self, naive_fit, adam_fit, exact_system):
        X, y, _ = exact_system
        closed = fit(X, y, optimizer=PseudoInverse())
        for result in (naive_fit, adam_fit):
            np.testing.assert_allclose(
                result.coefficients, closed.coefficients, atol=ITERATIVE.atol
            )
            assert result.agrees_with(closed)
            assert closed.agrees_with(result)

    def test_unsettled_run_disagrees(self, exact_system):
        X, y, _ = exact_system
        closed = fit(X, y, optimizer=PseudoInverse())
        with pytest.warns(RuntimeWarning):
            early = fit(X, y, optimizer=NaiveGradient(1e-3, max_iter=3))
        assert not early.agrees_with(closed)

    def test_agreement_needs_same_width(self, exact_system, noisy_regression_data):
        X, y, _ = exact_system
        X_wide, y_wide, _ = noisy_regression_data
        with pytest.raises(DimensionError, match="agrees_with"):
            fit(X, y).agrees_with(fit(X_wide, y_wide))

    def test_prediction_round_trip(self, naive_fit, adam_fit):
        for result in (naive_fit, adam_fit):
            for x, target in zip(X_EXACT, [0.0, 4.0]):
                assert abs(result.model.predict(x) - target) < ITERATIVE.atol

    def test_optimize_returns_residual_norm(self, exact_system):
        X, y, theta_star = exact_system
        model = LinearModel(2)
        residual = PseudoInverse().optimize(model, X, y)
        assert isinstance(residual, float)
        assert residual < 1e-12
        np.testing.assert_allclose(model.theta.to_numpy().ravel(), theta_star, atol=1e-12)

    def test_solve_on_design(self, exact_system):
        X, y, _ = exact_system
        design = RegressionDesign.build(X, y)
        model = LinearModel(design.p)
        opt = NaiveGradient(1e-3, max_iter=10)
        with pytest.warns(RuntimeWarning):
            outcome = opt.solve(model, design)
        assert outcome.backend_name == 'naive_gradient'
        assert outcome.params.iterations == 10
        assert outcome.params.theta == model.theta
