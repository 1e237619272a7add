from decimal import Decimal

from src.payroll_system.payroll_system.common.money import round_money
from src.payroll_system.payroll_system.payroll.aggregator import PeriodTotals
from src.payroll_system.payroll_system.payroll.calculator.base import BonusInputs, PayrollRules
from src.payroll_system.payroll_system.payroll.calculator.standard_calculator import StandardPayrollCalculator

from conftest import make_profile


def test_base_salary_only_gives_full_meal_and_net():
    calc = StandardPayrollCalculator()
    figures = calc.salary(make_profile(base_salary=Decimal("9000")), PeriodTotals())

    assert round_money(figures.daily_salary) == Decimal("300.00")
    assert round_money(figures.meal_allowance) == Decimal("500.00")
    assert round_money(figures.deductions_value) == Decimal("0.00")
    assert round_money(figures.net_salary) == Decimal("9500.00")


def test_two_absences_forfeit_meal_and_daily_salary():
    calc = StandardPayrollCalculator()
    figures = calc.salary(make_profile(base_salary=Decimal("9000")), PeriodTotals(total_absence_days=2))

    assert round_money(figures.meal_allowance) == Decimal("400.00")
    assert figures.total_deductions == Decimal("2")
    assert round_money(figures.deductions_value) == Decimal("600.00")
    assert round_money(figures.net_salary) == Decimal("8800.00")


def test_overtime_paid_at_hourly_rate():
    calc = StandardPayrollCalculator()
    figures = calc.salary(make_profile(base_salary=Decimal("9000")), PeriodTotals(total_overtime=Decimal("9")))

    assert round_money(figures.hourly_rate) == Decimal("33.33")
    assert round_money(figures.overtime_value) == Decimal("300.00")


def test_meal_allowance_never_negative():
    calc = StandardPayrollCalculator()
    base = Decimal("500")

    assert round_money(calc.meal_allowance(base, 0)) == Decimal("500.00")
    assert round_money(calc.meal_allowance(base, 10)) == Decimal("0.00")
    assert round_money(calc.meal_allowance(base, 12)) == Decimal("0.00")


def test_leave_compensation_paid_double():
    calc = StandardPayrollCalculator()
    figures = calc.salary(
        make_profile(base_salary=Decimal("9000")),
        PeriodTotals(total_leave_compensation_days=1),
    )

    assert round_money(figures.leave_compensation_value) == Decimal("600.00")
    assert round_money(figures.net_salary) == Decimal("10100.00")


def test_every_deduction_source_reduces_net():
    calc = StandardPayrollCalculator()
    profile = make_profile(
        base_salary=Decimal("9000"),
        medical_insurance=Decimal("100"),
        social_insurance=Decimal("200"),
        penalties_value=Decimal("50"),
        violations_installment=Decimal("25"),
        advances=Decimal("300"),
        eid_bonus=Decimal("1000"),
    )
    totals = PeriodTotals(
        total_absence_days=1,
        late_deduction_days=Decimal("0.5"),
        medical_leave_deduction_days=Decimal("0.25"),
    )

    figures = calc.salary(profile, totals)

    # 1.75 days * 300 + 50 + 25 + 300
    assert figures.total_deductions == Decimal("1.75")
    assert round_money(figures.deductions_value) == Decimal("900.00")
    assert round_money(figures.total_violations_value) == Decimal("75.00")
    # 9000 + 450 meal + 1000 eid - 100 - 200 - 900
    assert round_money(figures.net_salary) == Decimal("9250.00")


def test_rules_are_injectable():
    calc = StandardPayrollCalculator(PayrollRules(month_days=26))
    assert round_money(calc.daily_salary(Decimal("2600"))) == Decimal("100.00")


def test_net_bonus_prorated_by_absences():
    calc = StandardPayrollCalculator()
    net = calc.net_bonus(
        BonusInputs(base_bonus=Decimal("1000"), bonus_percentage=Decimal("50"), absences=2)
    )
    assert round_money(net) == Decimal("466.67")


def test_net_bonus_floored_at_zero():
    calc = StandardPayrollCalculator()
    net = calc.net_bonus(
        BonusInputs(
            base_bonus=Decimal("1000"),
            bonus_percentage=Decimal("50"),
            absences=3,
            tie_up_value=Decimal("100"),
            deductions=Decimal("600"),
        )
    )
    assert net == Decimal("0")
