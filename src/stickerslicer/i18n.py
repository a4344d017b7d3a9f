"""
User-facing strings.

Each supported Language maps to one immutable Messages record, so a missing
key is an error at definition time rather than at lookup.
"""

from enum import Enum
from typing import Dict, NamedTuple

from stickerslicer.errors import (
    ArchiveError,
    DecodeError,
    EncodeError,
    SurfaceError,
)


class Language(str, Enum):
    """Supported interface languages."""

    EN = "en"
    ZH = "zh"

    @classmethod
    def parse(cls, value) -> "Language":
        """Parse a language tag such as 'en' or 'zh-CN'."""
        if isinstance(value, cls):
            return value
        tag = str(value or "").split("-")[0].split("_")[0].lower()
        try:
            return cls(tag)
        except ValueError:
            valid_options = [v.value for v in cls]
            raise ValueError(
                f"Unsupported language: {value}. Expected one of: {valid_options}"
            )

    def toggled(self) -> "Language":
        return Language.ZH if self is Language.EN else Language.EN


class Messages(NamedTuple):
    title: str
    subtitle: str
    upload_title: str
    image_loaded: str
    click_to_change: str
    click_to_upload: str
    formats: str
    grid_settings: str
    columns: str
    rows: str
    default_4x6: str
    preset_3x3: str
    processing: str
    zipping: str
    working: str
    done: str
    slice_download: str
    privacy: str
    no_image: str
    upload_to_preview: str
    preview_info: str
    reset_position: str
    switch_language: str
    step1_title: str
    step1_desc: str
    step2_title: str
    step2_desc: str
    step3_title: str
    step3_desc: str
    saved_to: str
    open_folder: str
    error: str
    decode_error: str
    surface_error: str
    encode_error: str
    archive_error: str


TRANSLATIONS: Dict[Language, Messages] = {
    Language.EN: Messages(
        title="Sticker Grid Slicer",
        subtitle="Crop expression packs into individual stickers instantly",
        upload_title="1. Upload Image",
        image_loaded="Image Loaded",
        click_to_change="Click to change",
        click_to_upload="Click to upload",
        formats="PNG, JPG, WEBP",
        grid_settings="2. Grid Settings",
        columns="Columns (X)",
        rows="Rows (Y)",
        default_4x6="Default 4x6",
        preset_3x3="3x3",
        processing="Processing...",
        zipping="Zipping...",
        working="Working...",
        done="Done!",
        slice_download="Slice & Download ZIP",
        privacy="All processing happens on your computer. Your images are never uploaded to a server.",
        no_image="No Image Selected",
        upload_to_preview="Upload an image to see the grid preview",
        preview_info="Preview showing {cols} columns x {rows} rows",
        reset_position="Reset position",
        switch_language="中文",
        step1_title="1. Choose Image",
        step1_desc="Select your large meme or sticker sheet (usually a large JPG or PNG).",
        step2_title="2. Adjust Grid",
        step2_desc="Set columns and rows. Standard WeChat/Telegram packs are often 4x6.",
        step3_title="3. Download",
        step3_desc="Get a ZIP file containing all your cropped individual images.",
        saved_to="Saved to: {path}",
        open_folder="Slicing complete!\n\nWould you like to open the output folder?",
        error="An error occurred while processing the image.",
        decode_error="The file is not a readable PNG, JPG or WEBP image.",
        surface_error="Could not prepare a drawing surface. Try fewer rows or columns.",
        encode_error="A sticker could not be encoded as PNG.",
        archive_error="The ZIP archive could not be created.",
    ),
    Language.ZH: Messages(
        title="表情包切图工具",
        subtitle="快速将表情包大图裁剪成独立的表情图片",
        upload_title="1. 上传图片",
        image_loaded="图片已加载",
        click_to_change="点击更换",
        click_to_upload="点击上传",
        formats="支持 PNG, JPG, WEBP",
        grid_settings="2. 网格设置",
        columns="列数 (X)",
        rows="行数 (Y)",
        default_4x6="默认 4x6",
        preset_3x3="3x3",
        processing="处理中...",
        zipping="压缩中...",
        working="处理中...",
        done="完成！",
        slice_download="切图并下载 ZIP",
        privacy="所有处理均在本机完成。您的图片不会上传到服务器。",
        no_image="未选择图片",
        upload_to_preview="上传图片以预览网格",
        preview_info="预览显示 {cols} 列 x {rows} 行",
        reset_position="重置位置",
        switch_language="English",
        step1_title="1. 选择图片",
        step1_desc="选择您的大图表情包（通常是大尺寸的 JPG 或 PNG）。",
        step2_title="2. 调整网格",
        step2_desc="设置列数和行数。微信/Telegram 表情包通常是 4x6。",
        step3_title="3. 下载",
        step3_desc="获取包含所有裁剪后独立图片的 ZIP 文件。",
        saved_to="已保存到：{path}",
        open_folder="切图完成！\n\n是否打开输出文件夹？",
        error="处理图片时发生错误。",
        decode_error="该文件不是可读取的 PNG、JPG 或 WEBP 图片。",
        surface_error="无法创建绘图画布。请减少行数或列数。",
        encode_error="有表情图片无法编码为 PNG。",
        archive_error="无法创建 ZIP 压缩包。",
    ),
}


def get_messages(language) -> Messages:
    """Return the message record for a Language or language tag."""
    return TRANSLATIONS[Language.parse(language)]


def format_preview_info(messages: Messages, config) -> str:
    return messages.preview_info.format(cols=config.cols, rows=config.rows)


def error_message(messages: Messages, exc: BaseException) -> str:
    """Pick the localized message for an export failure."""
    if isinstance(exc, DecodeError):
        return messages.decode_error
    if isinstance(exc, SurfaceError):
        return messages.surface_error
    if isinstance(exc, EncodeError):
        return messages.encode_error
    if isinstance(exc, ArchiveError):
        return messages.archive_error
    return messages.error
