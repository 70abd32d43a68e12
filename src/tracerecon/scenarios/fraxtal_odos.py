"""Odos liquidity-swap adapter exploit on Fraxtal.

Production tx 0xd8ae4f2a66d059e73407eca6ba0ba5080f5003f5abbf29867345425276734a32:
three victims drained in one transaction, funded by a 40,000 dUSD flash-mint.
Each swap returns 1 smallest unit of dust to satisfy the adapter's minOut.
"""

from tracerecon.domain.models.scenario import GlobalCheckSpec, Scenario, VictimSpec

DUSD_DECIMALS = 6  # 6 on Fraxtal, 18 on Sonic
SFRXETH_DECIMALS = 18
SUSDE_DECIMALS = 18

FLASH_MINT_AMOUNT = 40_000 * 10**DUSD_DECIMALS

VICTIM_1_COLLATERAL = 25_660_570_000  # 25,660.57 dUSD
VICTIM_2_COLLATERAL = 9_470_000_000_000_000_000  # 9.47 sfrxETH
VICTIM_3_COLLATERAL = 7_089_910_000_000_000_000_000  # 7,089.91 sUSDe
DUST_OUTPUT = 1

FRAXTAL_ODOS_V1 = Scenario(
    name="fraxtal-odos-v1",
    network="fraxtal",
    victims=[
        VictimSpec(
            victim_id=1,
            label="Victim 1 (dUSD)",
            symbol="dUSD",
            decimals=DUSD_DECIMALS,
            expected_collateral=VICTIM_1_COLLATERAL,
            expected_dust=DUST_OUTPUT,
        ),
        VictimSpec(
            victim_id=2,
            label="Victim 2 (sfrxETH)",
            symbol="sfrxETH",
            decimals=SFRXETH_DECIMALS,
            expected_collateral=VICTIM_2_COLLATERAL,
            expected_dust=DUST_OUTPUT,
        ),
        VictimSpec(
            victim_id=3,
            label="Victim 3 (sUSDe)",
            symbol="sUSDe",
            decimals=SUSDE_DECIMALS,
            expected_collateral=VICTIM_3_COLLATERAL,
            expected_dust=DUST_OUTPUT,
        ),
    ],
    global_check=GlobalCheckSpec(
        label="Flash mint",
        decimals=DUSD_DECIMALS,
        amount=FLASH_MINT_AMOUNT,
        tolerance=999,
    ),
)
