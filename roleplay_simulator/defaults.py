"""Built-in settings and user-facing texts.

The simulated contact centre is an Indonesian financial-services hotline, so
persona guidance, scenarios and notices shown to the trainee are in Indonesian.
"""

from __future__ import annotations

from .models.persona import Difficulty, PersonaType
from .models.scenario import Scenario
from .models.settings import AppSettings, IdentitySettings

DEFAULT_PERSONA_TYPES: tuple[PersonaType, ...] = (
    PersonaType(
        id="t1",
        name="Kooperatif",
        description="Santai dan to the point, langsung memberikan data yang diminta. Cenderung sabar.",
        difficulty=Difficulty.EASY,
    ),
    PersonaType(
        id="t2",
        name="Ngeyel tapi Patuh",
        description=(
            "Banyak memakai tanda seru, merasa masalahnya sangat darurat dan menuntut solusi saat itu juga. "
            "Awalnya menolak prosedur standar tetapi akhirnya menurut."
        ),
        difficulty=Difficulty.MEDIUM,
    ),
    PersonaType(
        id="t3",
        name="Gaptek (Gagap Teknologi)",
        description=(
            "Bingung dengan istilah teknis seperti 'cache', 'OTP' atau 'reinstall'. "
            "Perlu dipandu langkah demi langkah dengan pelan."
        ),
        difficulty=Difficulty.HARD,
    ),
    PersonaType(
        id="t4",
        name="Tidak Responsif",
        description=(
            "Berhenti membalas di tengah percakapan walaupun sudah disapa berkali-kali, "
            "atau membalas sangat singkat dan tidak nyambung."
        ),
        difficulty=Difficulty.HARD,
    ),
)

DEFAULT_SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        id="s1",
        category="Masalah Teknis",
        title="Masalah Teknis Aplikasi",
        description=(
            "Tidak bisa login ke aplikasi mobile banking padahal password sudah benar. "
            "Pesan error yang muncul adalah 'Koneksi Terputus'."
        ),
    ),
    Scenario(
        id="s2",
        category="Masalah Transaksi",
        title="Masalah Transaksi Gagal",
        description=(
            "Transfer atau pembayaran tagihan lewat mobile banking sudah memotong saldo, tetapi statusnya masih "
            "'Menunggu' dan penerima belum menerima dana. Sudah lapor ke bank tetapi tetap ingin membuat laporan ke OJK."
        ),
    ),
    Scenario(
        id="s3",
        category="Pengaduan Perilaku",
        title="Masalah Perilaku Petugas Penagihan",
        description=(
            "Ingin melaporkan petugas penagih yang mengancam, berkata kasar, "
            "dan menghubungi orang yang bukan kontak darurat."
        ),
    ),
    Scenario(
        id="s4",
        category="Keringanan Kredit",
        title="Masalah Ingin Mengajukan Restrukturisasi",
        description="Punya pinjaman di bank yang tidak sanggup dilunasi dan ingin mengajukan keringanan atau penundaan pembayaran.",
    ),
    Scenario(
        id="s5",
        category="Pinjaman Online",
        title="Masalah Pinjol Ilegal",
        description="Menerima pencairan dana dari pinjaman online yang ternyata ilegal dan ingin tahu cara penyelesaiannya.",
    ),
)

NAME_POOL: tuple[str, ...] = (
    "Budi Santoso", "Siti Aminah", "Agus Setiawan", "Dewi Lestari", "Rina Marlina",
    "Eko Prasetyo", "Sri Wahyuni", "Indra Wijaya", "Maya Sari", "Rudi Hartono",
)

CITY_POOL: tuple[str, ...] = (
    "Jakarta Selatan", "Surabaya", "Bandung", "Medan", "Semarang",
    "Makassar", "Palembang", "Denpasar", "Yogyakarta", "Balikpapan",
)

PHONE_PREFIX = "08"
PHONE_RANDOM_DIGITS = 9

# Opening line for the trainee; the XXX placeholders are filled in by hand.
GREETING_TEMPLATE = (
    "Anda telah terhubung dengan Layanan Kontak OJK 157.\n"
    "Selamat Pagi/Siang/Sore.\n"
    "Saya XXX dengan senang hati memberikan informasi yang Bapak/Ibu XXX butuhkan seputar Sektor Jasa Keuangan. "
    "Perihal apa yang dapat kami bantu?"
)

CONNECTED_NOTICE = "Anda terhubung dengan {name}, {phone} ({city})"
EMPTY_RESPONSE_TEXT = "Konsumen tidak memberikan respons."


def default_settings() -> AppSettings:
    """Settings used on first run and after a reset."""
    return AppSettings(
        scenarios=DEFAULT_SCENARIOS,
        persona_types=DEFAULT_PERSONA_TYPES,
        identity_settings=IdentitySettings(),
    )
