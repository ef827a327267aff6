from __future__ import annotations

import itertools
import unittest

from tire.domain.entities.token import PairRecord, PairToken
from tire.domain.services.token_aggregation import (
    aggregate_pairs,
    build_token_rows,
    to_token_row,
)


def _token(address: str, symbol: str, name: str | None = None) -> PairToken:
    return PairToken(address=address, symbol=symbol, name=name or f"{symbol} Token", decimals="18")


def _pair(
    pair_id: str,
    token0: PairToken,
    token1: PairToken,
    *,
    reserve_usd: str = "0",
    volume_usd: str = "0",
    created: str = "1700000000",
) -> PairRecord:
    return PairRecord(
        id=pair_id,
        token0=token0,
        token1=token1,
        reserve0="1",
        reserve1="1",
        reserve_usd=reserve_usd,
        volume_usd=volume_usd,
        tx_count="10",
        created_at_timestamp=created,
        total_supply="1",
    )


WPLS = _token("0xwpls", "WPLS", "Wrapped Pulse")
WETH = _token("0xweth", "WETH", "Wrapped Ether")
FOO = _token("0xa", "FOO")
BAR = _token("0xb", "BAR")
BAZ = _token("0xc", "BAZ")


class AggregatePairsTests(unittest.TestCase):
    def test_single_pair_against_excluded_quote(self):
        pairs = [_pair("0xpool", WPLS, FOO, reserve_usd="1000", volume_usd="200")]

        aggregates = aggregate_pairs(pairs)

        self.assertEqual(list(aggregates), ["0xa"])
        foo = aggregates["0xa"]
        self.assertEqual(foo.total_liquidity, 500)
        self.assertEqual(foo.total_volume, 100)
        self.assertEqual(foo.pool_count, 1)
        self.assertEqual(foo.best_pool.address, "0xpool")
        self.assertEqual(foo.best_pool.liquidity, 500)

    def test_dead_pairs_contribute_nothing(self):
        pairs = [
            _pair("0xdead", FOO, BAR, reserve_usd="0", volume_usd="0"),
            _pair("0xneg", FOO, BAZ, reserve_usd="-5", volume_usd=""),
        ]
        self.assertEqual(aggregate_pairs(pairs), {})

    def test_pair_with_volume_only_is_kept(self):
        aggregates = aggregate_pairs([_pair("0xp", FOO, BAR, reserve_usd="0", volume_usd="50")])

        self.assertEqual(aggregates["0xa"].total_volume, 25)
        self.assertEqual(aggregates["0xa"].total_liquidity, 0)
        self.assertEqual(aggregates["0xa"].best_pool.address, "0xp")

    def test_excluded_symbols_never_become_keys(self):
        pairs = [
            _pair("0x1", WPLS, WETH, reserve_usd="100", volume_usd="10"),
            _pair("0x2", WETH, FOO, reserve_usd="100", volume_usd="10"),
        ]
        aggregates = aggregate_pairs(pairs)

        self.assertNotIn("0xwpls", aggregates)
        self.assertNotIn("0xweth", aggregates)
        self.assertIn("0xa", aggregates)

    def test_custom_excluded_symbols(self):
        pairs = [_pair("0x1", FOO, BAR, reserve_usd="100", volume_usd="10")]
        aggregates = aggregate_pairs(pairs, excluded_symbols={"FOO"})
        self.assertEqual(list(aggregates), ["0xb"])

    def test_empty_address_is_skipped(self):
        pairs = [_pair("0x1", _token("", "GHOST"), FOO, reserve_usd="100", volume_usd="10")]
        self.assertEqual(list(aggregate_pairs(pairs)), ["0xa"])

    def test_best_pool_tracks_highest_liquidity_share(self):
        pairs = [
            _pair("0xsmall", FOO, WPLS, reserve_usd="100", volume_usd="1", created="1700000300"),
            _pair("0xbig", FOO, BAR, reserve_usd="900", volume_usd="1", created="1700000100"),
            _pair("0xmid", FOO, BAZ, reserve_usd="500", volume_usd="1", created="1700000200"),
        ]
        foo = aggregate_pairs(pairs)["0xa"]

        self.assertEqual(foo.best_pool.address, "0xbig")
        self.assertEqual(foo.best_pool.liquidity, 450)
        self.assertEqual(foo.earliest_created, 1700000100 * 1000)
        self.assertEqual([pool.address for pool in foo.pools], ["0xsmall", "0xbig", "0xmid"])

    def test_pool_count_matches_pools_and_earliest_is_minimum(self):
        pairs = [
            _pair("0x1", FOO, BAR, reserve_usd="100", volume_usd="10", created="1700000500"),
            _pair("0x2", FOO, BAZ, reserve_usd="300", volume_usd="30", created="1700000100"),
            _pair("0x3", BAR, BAZ, reserve_usd="50", volume_usd="0", created="1700000900"),
        ]
        for aggregate in aggregate_pairs(pairs).values():
            self.assertEqual(aggregate.pool_count, len(aggregate.pools))
            self.assertEqual(aggregate.earliest_created, min(pool.created for pool in aggregate.pools))
            self.assertGreaterEqual(aggregate.total_liquidity, 0)

    def test_totals_do_not_depend_on_pair_order(self):
        pairs = [
            _pair("0x1", FOO, BAR, reserve_usd="100", volume_usd="10", created="1700000500"),
            _pair("0x2", FOO, BAZ, reserve_usd="300", volume_usd="30", created="1700000100"),
            _pair("0x3", BAR, WPLS, reserve_usd="50", volume_usd="4", created="1700000900"),
            _pair("0x4", BAZ, BAR, reserve_usd="20", volume_usd="8", created="1700000700"),
        ]

        def totals(items):
            return {
                address: (agg.total_liquidity, agg.total_volume, agg.pool_count, agg.earliest_created)
                for address, agg in aggregate_pairs(items).items()
            }

        expected = totals(pairs)
        for permutation in itertools.permutations(pairs):
            self.assertEqual(totals(list(permutation)), expected)


class TokenRowProjectionTests(unittest.TestCase):
    def test_projection_leaves_price_for_enrichment(self):
        aggregate = aggregate_pairs([_pair("0xpool", WPLS, FOO, reserve_usd="1000", volume_usd="200")])["0xa"]

        row = to_token_row(aggregate)

        self.assertEqual(row.price, 0)
        self.assertEqual(row.price_change_24h, 0)
        self.assertEqual(row.liquidity, 500)
        self.assertEqual(row.volume_24h, 100)
        self.assertEqual(row.pair_address, "0xpool")
        self.assertEqual(row.url, "https://dexscreener.com/pulsechain/0xpool")
        self.assertEqual(row.source, "SUBGRAPH_ONLY")
        self.assertEqual(row.pool_count, 1)

    def test_projection_defaults_missing_labels_and_nan(self):
        nameless = PairToken(address="0xn", symbol="", name="", decimals="18")
        aggregate = aggregate_pairs(
            [_pair("0xpool", nameless, WPLS, reserve_usd="not-a-number", volume_usd="10")]
        )["0xn"]

        row = to_token_row(aggregate, explorer_base_url="https://explorer.example/")

        self.assertEqual(row.symbol, "Unknown")
        self.assertEqual(row.name, "Unknown Token")
        self.assertEqual(row.liquidity, 0)
        self.assertEqual(row.volume_24h, 5)
        self.assertEqual(row.url, "https://explorer.example/0xpool")


class BuildTokenRowsTests(unittest.TestCase):
    def _aggregates(self):
        return aggregate_pairs(
            [
                _pair("0x1", FOO, WPLS, reserve_usd="100", volume_usd="10", created="1700000100"),
                _pair("0x2", BAR, WPLS, reserve_usd="300", volume_usd="2", created="1700000300"),
                _pair("0x3", BAZ, WPLS, reserve_usd="200", volume_usd="90", created="1700000200"),
            ]
        )

    def test_sorts_by_view_key(self):
        aggregates = self._aggregates()

        by_volume = build_token_rows(aggregates, view="volume", limit=10)
        by_liquidity = build_token_rows(aggregates, view="liquidity", limit=10)
        by_age = build_token_rows(aggregates, view="new", limit=10)

        self.assertEqual([row.symbol for row in by_volume], ["BAZ", "FOO", "BAR"])
        self.assertEqual([row.symbol for row in by_liquidity], ["BAR", "BAZ", "FOO"])
        self.assertEqual([row.symbol for row in by_age], ["BAR", "BAZ", "FOO"])

    def test_truncates_before_sorting(self):
        rows = build_token_rows(self._aggregates(), view="volume", limit=2)

        # BAZ has the highest volume but was aggregated third, so the cut drops it.
        self.assertEqual([row.symbol for row in rows], ["FOO", "BAR"])
