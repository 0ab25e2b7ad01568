# laporan_utils.py
from io import BytesIO
from typing import Any, Dict

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from data_utils import format_tanggal, sekarang

COLUMN_MAPS = {
    'tanggal_teks': 'Tanggal',
    'tekanan_darah': 'Tekanan Darah\n(mmHg)',
    'status_tekanan_darah': 'Status\nTekanan Darah',
    'gula_darah': 'Gula Darah\n(mg/dL)',
    'status_gula_darah': 'Status\nGula Darah',
    'catatan': 'Catatan',
}


def generate_pdf_riwayat(profile: Dict[str, Any], df_riwayat: pd.DataFrame, nama_posyandu: str = "") -> BytesIO:
    """
    Membuat laporan PDF berisi data diri lansia dan riwayat pemeriksaannya.

    Args:
        profile (dict): Data profil dari backend (nama, usia, alamat, riwayat_medis, created_at).
        df_riwayat (pd.DataFrame): Hasil siapkan_riwayat_pemeriksaan().
        nama_posyandu (str): Nama posyandu untuk judul laporan (opsional).

    Returns:
        BytesIO: Buffer PDF yang sudah di-seek ke awal.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, rightMargin=54, leftMargin=54, topMargin=72, bottomMargin=18)

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name='Center', alignment=TA_CENTER))
    elements = []

    judul = "Riwayat Pemeriksaan Lansia"
    if nama_posyandu:
        judul += f" - {nama_posyandu}"
    elements.append(Paragraph(judul, styles['h1']))
    elements.append(Spacer(1, 0.2 * inch))

    # --- Data Diri ---
    data_diri = [
        ['Nama Lengkap', f": {profile.get('nama', '-')}"],
        ['Usia', f": {profile.get('usia', '-')} tahun"],
        ['Alamat', f": {profile.get('alamat') or '-'}"],
        ['Riwayat Medis', f": {profile.get('riwayat_medis') or 'Tidak ada riwayat khusus'}"],
        ['Terdaftar', f": {format_tanggal(profile.get('created_at'))}"],
    ]
    tabel_diri = Table(data_diri, colWidths=[1.6 * inch, 4.4 * inch], hAlign='LEFT')
    tabel_diri.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ]))
    elements.append(tabel_diri)
    elements.append(Spacer(1, 0.3 * inch))

    # --- Tabel Riwayat ---
    elements.append(Paragraph(f"Riwayat Pemeriksaan ({len(df_riwayat)} kali)", styles['h2']))
    elements.append(Spacer(1, 0.1 * inch))

    if df_riwayat.empty:
        elements.append(Paragraph("Belum ada riwayat pemeriksaan.", styles['Normal']))
    else:
        df_display = df_riwayat[list(COLUMN_MAPS)].copy()
        df_display['gula_darah'] = df_display['gula_darah'].apply(lambda v: "-" if pd.isna(v) else f"{v:g}")
        df_display = df_display.rename(columns=COLUMN_MAPS)
        df_display.insert(0, "No", range(1, len(df_display) + 1))

        table_data = [df_display.columns.to_list()] + df_display.astype(str).values.tolist()
        tabel_riwayat = Table(table_data, repeatRows=1, hAlign='LEFT')
        tabel_riwayat.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.darkslategray), ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'), ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'), ('FONTSIZE', (0, 0), (-1, 0), 9),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 10),
            ('BACKGROUND', (0, 1), (-1, -1), colors.beige),
            ('GRID', (0, 0), (-1, -1), 1, colors.black),
            ('FONTSIZE', (0, 1), (-1, -1), 8),
        ]))
        elements.append(tabel_riwayat)

    elements.append(Spacer(1, 0.3 * inch))
    elements.append(Paragraph(f"Dicetak pada {format_tanggal(sekarang())} UTC", styles['Center']))

    doc.build(elements)
    buffer.seek(0)
    return buffer
