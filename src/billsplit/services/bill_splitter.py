"""Bill splitting service"""
import math
from typing import Dict, List, Sequence
from loguru import logger

from ..models.entities import BillSummary, Dish, Person, PersonShare, Tax
from .tax_accumulator import compute_taxes, fixed_tax_total, non_negative

# Relative tolerance used when checking that the split adds up to the grand total
CONSERVATION_TOLERANCE = 1e-9


class BillSplitterService:
    def compute_subtotal(self, dishes: Sequence[Dish]) -> float:
        """Sum of all dish prices, shared or not"""
        return sum(non_negative(dish.price, f"dish '{dish.name}'") for dish in dishes)

    def compute_split(
        self,
        people: Sequence[Person],
        dishes: Sequence[Dish],
        taxes: Sequence[Tax]
    ) -> Dict[str, float]:
        """
        Calculate what each person owes, proportionally to what they consumed

        Args:
            people: Everyone taking part in the bill
            dishes: Dishes with the ids of the people sharing them
            taxes: Percentage and fixed taxes applied to the whole bill

        Returns:
            Dictionary mapping person ids to their owed amount
        """
        summary = self.summarize_bill(people, dishes, taxes)
        return {person_id: share.amount for person_id, share in summary.split.items()}

    def summarize_bill(
        self,
        people: Sequence[Person],
        dishes: Sequence[Dish],
        taxes: Sequence[Tax]
    ) -> BillSummary:
        """
        Calculate totals and the per-person split of a bill

        Each person's owed amount is their share of the dish costs divided by the
        subtotal, times the grand total. With a zero subtotal only the fixed taxes
        remain and they are split equally.
        """
        # 1. Totals
        subtotal = self.compute_subtotal(dishes)
        tax_breakdown = compute_taxes(subtotal, taxes)
        grand_total = subtotal + tax_breakdown.total

        split = {person.id: PersonShare(name=person.name, amount=0.0) for person in people}
        if not people:
            return BillSummary(
                subtotal=subtotal,
                total_tax=tax_breakdown.total,
                grand_total=grand_total,
                per_tax=tax_breakdown.per_tax,
                split=split,
            )

        # 2. Each person's share of the dish costs
        base_subtotals = self._base_subtotals(people, dishes)

        # 3. Scale the shares up to the grand total
        if subtotal > 0:
            for person in people:
                proportion = base_subtotals[person.id] / subtotal
                split[person.id].amount = proportion * grand_total
        else:
            equal_share = fixed_tax_total(taxes) / len(people)
            for person in people:
                split[person.id].amount = equal_share

        logger.debug("--- Bill Breakdown ---")
        for person in people:
            logger.debug(
                f"{person.name}: base {base_subtotals[person.id]:.2f}, "
                f"owes {split[person.id].amount:.2f}"
            )

        # 4. Verification
        unassigned_amount = 0.0
        if subtotal > 0:
            allocated = sum(share.amount for share in split.values())
            if not math.isclose(allocated, grand_total, rel_tol=CONSERVATION_TOLERANCE):
                unassigned_amount = grand_total - allocated
                unassigned = [d.name for d in self._unassigned_dishes(dishes)]
                logger.warning(
                    f"Split total {allocated:.2f} does not match grand total {grand_total:.2f}. "
                    f"Unassigned dishes (cost not allocated): {', '.join(unassigned)}"
                )

        return BillSummary(
            subtotal=subtotal,
            total_tax=tax_breakdown.total,
            grand_total=grand_total,
            per_tax=tax_breakdown.per_tax,
            split=split,
            unassigned_amount=unassigned_amount,
        )

    def _base_subtotals(self, people: Sequence[Person], dishes: Sequence[Dish]) -> Dict[str, float]:
        base_subtotals = {person.id: 0.0 for person in people}
        for dish in dishes:
            price = non_negative(dish.price, f"dish '{dish.name}'")
            sharers = list(dict.fromkeys(dish.shared_by))
            if price <= 0 or not sharers:
                continue

            cost_per_sharer = price / len(sharers)
            for person_id in sharers:
                if person_id in base_subtotals:
                    base_subtotals[person_id] += cost_per_sharer
                else:
                    logger.warning(f"Dish '{dish.name}' is shared by unknown person '{person_id}'. Skipping.")
        return base_subtotals

    def _unassigned_dishes(self, dishes: Sequence[Dish]) -> List[Dish]:
        return [dish for dish in dishes if dish.price > 0 and not dish.shared_by]


# Global service instance
bill_splitter_service = BillSplitterService()
