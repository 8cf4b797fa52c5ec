#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Bracketing and interpolation over tabulated energy grids

Every table in PyFluo stores a strictly increasing energy grid.  The
helpers in this module locate the bracketing samples of a query value by
binary search and interpolate between them.  No extrapolation is ever
performed: a query outside ``[table[0], table[-1]]`` raises
:class:`~pyfluo.exceptions.OutOfRangeError`.

Log-log interpolation
---------------------
Between the bracketing samples ``(x_lo, y_lo)`` and ``(x_hi, y_hi)``::

    ln y = ln y_lo + (ln x - ln x_lo) * (ln y_hi - ln y_lo) / (ln x_hi - ln x_lo)

When the query hits a sample exactly, that sample value is returned
unchanged so there is no drift through the ``log``/``exp`` round trip.

All functions accept either a scalar query (returning Python scalars) or
a sequence of queries (returning NumPy arrays in input order).
"""

from __future__ import annotations

import numpy as np

from pyfluo.exceptions import DomainError, OutOfRangeError


def _check_span(table: np.ndarray, x: np.ndarray) -> None:
    if table.size == 0:
        raise OutOfRangeError("Cannot bracket a value in an empty table.")
    outside = (x < table[0]) | (x > table[-1]) | ~np.isfinite(x)
    if np.any(outside):
        bad = float(x[np.argmax(outside)])
        raise OutOfRangeError(
            f"Value {bad:.6e} is outside the table span "
            f"[{table[0]:.6e}, {table[-1]:.6e}]."
        )


def locate_brackets(table, x) -> tuple[np.ndarray, np.ndarray]:
    """Vectorised bracket search

    Parameters
    ----------
    table : array_like
        Strictly increasing 1-D grid.
    x : array_like
        Query values.

    Returns
    -------
    (numpy.ndarray, numpy.ndarray)
        Integer index arrays ``lo`` and ``hi`` with the shape of *x* such
        that ``table[lo] <= x <= table[hi]``; ``lo == hi`` where *x*
        equals a table sample.

    Raises
    ------
    OutOfRangeError
        If any query lies outside the table span.
    """
    grid = np.asarray(table, dtype="f8")
    xs = np.atleast_1d(np.asarray(x, dtype="f8"))
    _check_span(grid, xs)

    hi = np.searchsorted(grid, xs, side="left")
    exact = grid[hi] == xs
    lo = np.where(exact, hi, hi - 1)
    return lo, hi


def locate_bracket(table, x: float) -> tuple[int, int]:
    """Return the indices ``(lo, hi)`` of the samples bracketing *x*

    Runs in O(log n) via :func:`numpy.searchsorted`.

    Examples
    --------
    >>> locate_bracket([1.0, 2.0, 4.0], 3.0)
    (1, 2)
    >>> locate_bracket([1.0, 2.0, 4.0], 2.0)
    (1, 1)
    """
    lo, hi = locate_brackets(table, float(x))
    return int(lo[0]), int(hi[0])


def _unwrap(result: np.ndarray, x):
    if np.ndim(x) == 0:
        return float(result[0])
    return result


def interpolate_log_log(table, values, x):
    """Log-log interpolation of *values* tabulated on *table*

    Parameters
    ----------
    table : array_like
        Strictly increasing, positive energy grid.
    values : array_like
        Tabulated values aligned with *table*.
    x : float or array_like
        Query point(s).

    Returns
    -------
    float or numpy.ndarray
        Interpolated value(s); a float for scalar *x*.

    Raises
    ------
    OutOfRangeError
        If a query lies outside the table span.
    DomainError
        If a query is non-positive or a bracketing value is non-positive.

    Examples
    --------
    >>> round(interpolate_log_log([1.0, 10.0], [100.0, 1.0], 10.0 ** 0.5), 9)
    10.0
    """
    grid = np.asarray(table, dtype="f8")
    vals = np.asarray(values, dtype="f8")
    xs = np.atleast_1d(np.asarray(x, dtype="f8"))

    if np.any(xs <= 0.0):
        raise DomainError(
            f"Log-log interpolation needs positive arguments, got {float(xs.min()):.6e}."
        )
    lo, hi = locate_brackets(grid, xs)

    y_lo = vals[lo]
    y_hi = vals[hi]
    if np.any(y_lo <= 0.0) or np.any(y_hi <= 0.0):
        bad = int(np.argmax((y_lo <= 0.0) | (y_hi <= 0.0)))
        raise DomainError(
            f"Non-positive table value bracketing x={xs[bad]:.6e} "
            f"(y_lo={y_lo[bad]:.6e}, y_hi={y_hi[bad]:.6e})."
        )

    exact = lo == hi
    result = y_lo.copy()
    step = ~exact
    if np.any(step):
        x_lo = grid[lo[step]]
        x_hi = grid[hi[step]]
        slope = np.log(y_hi[step] / y_lo[step]) / np.log(x_hi / x_lo)
        result[step] = np.exp(np.log(y_lo[step]) + np.log(xs[step] / x_lo) * slope)
    return _unwrap(result, x)


def interpolate_linear(table, values, x):
    """Linear interpolation with the same bracketing rules as log-log

    Used for columns whose bracketing samples are not strictly positive,
    where a logarithm is undefined.
    """
    grid = np.asarray(table, dtype="f8")
    vals = np.asarray(values, dtype="f8")
    xs = np.atleast_1d(np.asarray(x, dtype="f8"))
    lo, hi = locate_brackets(grid, xs)

    result = vals[lo].copy()
    step = lo != hi
    if np.any(step):
        x_lo = grid[lo[step]]
        x_hi = grid[hi[step]]
        frac = (xs[step] - x_lo) / (x_hi - x_lo)
        result[step] = vals[lo[step]] + frac * (vals[hi[step]] - vals[lo[step]])
    return _unwrap(result, x)


def interpolate_column(table, values, x):
    """Interpolate one coefficient column, choosing the law per query

    Log-log where both bracketing samples are strictly positive, linear
    otherwise.  Used by the table stores so that a column that is zero
    over part of the grid (pair production below threshold) can still be
    queried.
    """
    grid = np.asarray(table, dtype="f8")
    vals = np.asarray(values, dtype="f8")
    xs = np.atleast_1d(np.asarray(x, dtype="f8"))
    lo, hi = locate_brackets(grid, xs)

    positive = (vals[lo] > 0.0) & (vals[hi] > 0.0) & (xs > 0.0)
    result = np.empty(xs.shape, dtype="f8")
    if np.any(positive):
        result[positive] = interpolate_log_log(grid, vals, xs[positive])
    if np.any(~positive):
        result[~positive] = interpolate_linear(grid, vals, xs[~positive])
    return _unwrap(result, x)
