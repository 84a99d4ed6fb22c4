"""
Hypothesis-testing engine.

Modules:
    trend:
        Mann-Kendall monotonic trend test.

    parametric:
        One-sample, pooled two-sample and paired t statistics, the variance
        ratio F-test and one-way ANOVA, plus scipy-backed tail helpers.

    nonparametric:
        Two-sample Kolmogorov-Smirnov on a fixed grid, Mann-Whitney U and
        Wilcoxon signed-rank with midranks.

    normality:
        Shapiro-Wilk (Shapiro-Francia weights) and Anderson-Darling.

    heteroscedasticity:
        White's, Breusch-Pagan and Goldfeld-Quandt tests with series
        approximated chi-square p-values.

Every test returns a frozen record from :mod:`hydrostats.schema`.
"""

from .heteroscedasticity import breusch_pagan_test, goldfeld_quandt_test, whites_test
from .nonparametric import ks_two_sample, mann_whitney_u, midranks, wilcoxon_signed_rank
from .normality import anderson_darling, shapiro_wilk
from .parametric import (
    anova_one_way,
    f_distribution_pvalue,
    f_test,
    t_distribution_pvalue,
    t_test_one_sample,
    t_test_paired,
    t_test_two_sample,
)
from .trend import mann_kendall

__all__ = [
    "mann_kendall",
    "ks_two_sample",
    "mann_whitney_u",
    "wilcoxon_signed_rank",
    "midranks",
    "t_test_one_sample",
    "t_test_two_sample",
    "t_test_paired",
    "f_test",
    "anova_one_way",
    "t_distribution_pvalue",
    "f_distribution_pvalue",
    "shapiro_wilk",
    "anderson_darling",
    "whites_test",
    "breusch_pagan_test",
    "goldfeld_quandt_test",
]
