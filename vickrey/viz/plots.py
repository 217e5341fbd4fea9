import logging

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

logger = logging.getLogger(__name__)


def bids_to_frame(auction_object):
    """
    One row per bid in ledger order.

    Columns: "position" (int), "participant" (str), "price" (int),
    "qualifying" (bool, price strictly above reserve).
    """
    rows = [
        {
            "position": i,
            "participant": bid.participant.name,
            "price": bid.price,
            "qualifying": bid.price > auction_object.reserve_price,
        }
        for i, bid in enumerate(auction_object.bids)
    ]
    return pd.DataFrame(rows, columns=["position", "participant", "price", "qualifying"])


def _finish(output_path):
    if output_path is None:
        plt.show()
        return None
    plt.savefig(output_path)
    plt.close()
    logger.info("Saved plot to %s", output_path)
    return output_path


def plot_bid_ledger(auction_object, outcome=None, output_path=None):
    """
    Bar chart of every bid in the ledger, color-coded by participant.

    Parameters
    ----------
    auction_object : AuctionObject
        Ledger to plot. The reserve price is drawn as a dashed line.
    outcome : AuctionOutcome, optional
        When it holds a result, the clearing price is drawn and the winning
        bid is annotated.
    output_path : str or Path, optional
        Save the figure there instead of showing it.
    """
    df = bids_to_frame(auction_object)
    if df.empty:
        raise ValueError("No bid data to plot.")

    plt.figure(figsize=(10, 6))
    ax = sns.barplot(
        data=df,
        x="position",
        y="price",
        hue="participant",
        dodge=False,
        edgecolor="black",
        alpha=0.8,
    )

    plt.axhline(
        auction_object.reserve_price,
        color="black",
        linestyle="--",
        label=f"Reserve ({auction_object.reserve_price})",
    )

    if outcome is not None and outcome.ok:
        result = outcome.result
        plt.axhline(
            result.clearing_price,
            color="red",
            linestyle=":",
            label=f"Clearing price ({result.clearing_price})",
        )
        winner_position = auction_object.bids.index(result.winner)
        ax.annotate(
            f"winner {result.winner.participant}",
            (winner_position, result.winner.price),
            ha="center",
            va="bottom",
            fontsize=8,
        )

    plt.title("Sealed Bids by Participant")
    plt.xlabel("Bid (ledger order)")
    plt.ylabel("Bid Price")
    plt.grid(True, linestyle="--", alpha=0.6)
    plt.legend(bbox_to_anchor=(1.05, 1), loc="upper left")
    plt.tight_layout()
    return _finish(output_path)


def plot_payoffs(settlement, output_path=None):
    """
    Plot payoff per participant.

    Parameters
    ----------
    settlement : AuctionSettlement
        Must contain payoffs: dict[str, int]
    """
    if not settlement.payoffs:
        raise ValueError("payoffs is empty.")

    # Sort participants by payoff
    sorted_items = sorted(settlement.payoffs.items(), key=lambda x: x[1], reverse=True)
    names, payoffs = zip(*sorted_items)

    plt.figure(figsize=(10, 6))
    plt.bar(names, payoffs, color="green", edgecolor="black")

    plt.title("Payoff per Participant")
    plt.xlabel("Participant")
    plt.ylabel("Payoff")
    plt.xticks(rotation=45, ha="right")
    plt.grid(True, linestyle="--", alpha=0.5)
    plt.tight_layout()
    return _finish(output_path)
